"""Runtime settings, read from the environment.

Every value has a default so the tool works with no configuration at all.
Command line flags override what is loaded here.
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .getskin import skin_url as default_skin_url

log = logging.getLogger(__name__)


def default_config_dir(environ: Mapping[str, str]) -> Path:
    if sys.platform.startswith('win') and environ.get('APPDATA'):
        return Path(environ['APPDATA']) / 'skinpack'
    base = environ.get('XDG_CONFIG_HOME')
    if base:
        return Path(base) / 'skinpack'
    return Path.home() / '.config' / 'skinpack'


@dataclass
class Settings:
    skin_url: str = default_skin_url
    config_dir: Path = Path('.')
    timeout: Optional[float] = None
    log_level: str = 'WARNING'

    @property
    def settings_file(self) -> Path:
        return self.config_dir / 'settings.json'


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        environ = os.environ

    timeout = None
    raw = environ.get('SKINPACK_TIMEOUT')
    if raw:
        try:
            timeout = float(raw)
        except ValueError:
            log.warning("Ignoring invalid SKINPACK_TIMEOUT {0!r}".format(raw))

    config_dir = environ.get('SKINPACK_CONFIG_DIR')
    return Settings(
        skin_url=environ.get('SKINPACK_SKIN_URL') or default_skin_url,
        config_dir=Path(config_dir) if config_dir else default_config_dir(environ),
        timeout=timeout,
        log_level=(environ.get('SKINPACK_LOG_LEVEL') or 'WARNING').upper(),
    )
