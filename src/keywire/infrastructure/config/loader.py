import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from keywire.application import Container
from keywire.domain import ConfigurationError

logger = logging.getLogger(__name__)

DEFINITIONS_KEY = "definitions"


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a definition mapping from a YAML or JSON file.

    The file holds a mapping of key to either a dotted class path or a record
    with ``class``, ``arguments``, ``methods`` and ``shared``. When the
    top-level mapping has a ``definitions`` entry, that entry is used.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.

    Returns:
        The definition mapping, ready for ``Container(config=...)``.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or is not a mapping.

    Example:
        >>> # services.yaml
        >>> # definitions:
        >>> #   mailer:
        >>> #     class: app.mail.SmtpMailer
        >>> #     arguments: [smtp.example.com, 25]
        >>> #     methods:
        >>> #       set_logger: [app.logging.Logger]
        >>> container = Container(config=load_config("services.yaml"))
    """
    config_path = Path(path)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            if config_path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            elif config_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(str(config_path), f"Unsupported file type '{config_path.suffix}'")
    except OSError as e:
        raise ConfigurationError(str(config_path), f"Cannot read file: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(str(config_path), f"Cannot parse file: {e}") from e

    if data is None:
        data = {}
    if isinstance(data, dict) and DEFINITIONS_KEY in data:
        data = data[DEFINITIONS_KEY] or {}
    if not isinstance(data, dict):
        raise ConfigurationError(str(config_path), "Top-level content must be a mapping")

    logger.debug("Loaded configuration from %s", config_path)
    return data


def load_container(path: Union[str, Path], **container_kwargs: Any) -> Container:
    """Create a container populated from a configuration file.

    Args:
        path: Path to the configuration file.
        **container_kwargs: Extra ``Container`` arguments (``cache``, ``cache_ttl``, ...).

    Returns:
        A container holding the file's definitions.
    """
    return Container(config=load_config(path), **container_kwargs)
