# Note: 'main' is not imported here so that mock.patch("hclust.cli.main.X")
# keeps resolving to the module. For the entry point use hclust.cli.main:main
from .main import HClustCLI

__all__ = ["HClustCLI"]
