"""Version information for mvnready."""
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version


def get_version() -> str:
    """Installed package version, or a dev marker when running from a checkout."""
    try:
        return version('mvnready')
    except PackageNotFoundError:
        return '0.0.0-dev'


__version__ = get_version()
