from .main import cli, run
