import hydra
from omegaconf import DictConfig

from retro_arcade.modes import list_available, play


@hydra.main(version_base=None, config_path="configs", config_name="config")
def my_app(cfg: DictConfig) -> None:
    match cfg.mode:
        case "play":
            play(cfg)
        case "list":
            list_available(cfg)
        case _:
            raise TypeError(
                f"Mode should be one of [play, list]. You used: {cfg.mode}"
            )


if __name__ == "__main__":
    my_app()
