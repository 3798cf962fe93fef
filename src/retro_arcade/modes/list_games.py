from omegaconf import DictConfig

from retro_arcade.registry import list_games


def list_available(cfg: DictConfig) -> None:
    """Print the registered games with their control labels."""
    for info in list_games():
        print(f"{info.id:<12} {info.title} - {info.description}")
        for role, label in info.controls.items():
            print(f"{'':<12}   {role}: {label}")
