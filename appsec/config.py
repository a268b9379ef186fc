"""
Configuration — key file locations
===================================
Resolves where the default key files live. The key stores themselves only
ever see resolved paths; this module is the one place that knows about the
"app.key / app.crt next to the program" convention.

Environment (a .env file found from the working directory is read first;
variables already set take precedence):
    APPSEC_KEY_DIR           directory holding the default key files
    APPSEC_PRIVATE_KEY_FILE  default private key filename   (app.key)
    APPSEC_CERTIFICATE_FILE  default certificate filename   (app.crt)

Dependencies: python-dotenv >= 1.0
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_PRIVATE_KEY_FILE = "app.key"
DEFAULT_CERTIFICATE_FILE = "app.crt"


def executable_dir() -> str:
    """Absolute directory of the running program."""
    if getattr(sys, "frozen", False):
        return os.path.dirname(os.path.abspath(sys.executable))
    if sys.argv and sys.argv[0]:
        return os.path.dirname(os.path.abspath(sys.argv[0]))
    return os.getcwd()


@dataclass(frozen=True)
class Settings:
    key_dir:          str
    private_key_file: str = DEFAULT_PRIVATE_KEY_FILE
    certificate_file: str = DEFAULT_CERTIFICATE_FILE

    @property
    def private_key_path(self) -> str:
        return os.path.join(self.key_dir, self.private_key_file)

    @property
    def certificate_path(self) -> str:
        return os.path.join(self.key_dir, self.certificate_file)


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        key_dir=os.getenv("APPSEC_KEY_DIR") or executable_dir(),
        private_key_file=os.getenv("APPSEC_PRIVATE_KEY_FILE", DEFAULT_PRIVATE_KEY_FILE),
        certificate_file=os.getenv("APPSEC_CERTIFICATE_FILE", DEFAULT_CERTIFICATE_FILE),
    )


def resolve_private_key_path(path: str = "",
                             settings: Optional[Settings] = None) -> str:
    """An empty path means the configured default (app.key); else verbatim."""
    if path:
        return path
    return (settings or load_settings()).private_key_path


def resolve_certificate_path(path: str = "",
                             settings: Optional[Settings] = None) -> str:
    """An empty path means the configured default (app.crt); else verbatim."""
    if path:
        return path
    return (settings or load_settings()).certificate_path
