"""
Runtime Configuration Store.

Settings can come from the `[tool.retext]` table of the nearest
`pyproject.toml`, with explicit arguments taking precedence.

.. code-block:: toml

    [tool.retext]
    parser = "latin"
    plugins = ["position", "stats"]
    plugin_paths = ["./retext_plugins"]

    [tool.retext.plugin_settings]
    stats_include_punctuation = true
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from retext.errors import ConfigurationError
from retext.parsers import DEFAULT_PARSER, available_parsers

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

T = TypeVar("T", bound=BaseModel)


class RetextConfig(BaseModel):
  """
  Configuration container for a processing instance.
  """

  parser: str = Field(DEFAULT_PARSER, description="Registered parser key (e.g. 'latin').")
  plugins: List[str] = Field(default_factory=list, description="Registered plugin names to attach, in order.")
  plugin_settings: Dict[str, Any] = Field(default_factory=dict, description="Configuration passed to plugins.")
  plugin_paths: List[Path] = Field(default_factory=list, description="External directories to scan for plugins.")
  trace: bool = Field(False, description="If True, record pipeline trace events.")

  @field_validator("parser")
  @classmethod
  def validate_parser(cls, v: str) -> str:
    """
    Ensures the parser is registered.

    Args:
        v (str): The parser key to validate.

    Returns:
        str: The normalized (lowercase) parser key.

    Raises:
        ValueError: If the parser is not found in the registry.
    """
    v_clean = v.lower().strip()
    known = available_parsers()
    if v_clean not in known:
      raise ValueError(f"Unknown parser: '{v_clean}'. Supported parsers: {known}")
    return v_clean

  def parse_plugin_settings(self, schema: Type[T]) -> T:
    """
    Validates the plugin settings relevant to `schema`.

    Keys the schema does not declare are ignored, so several plugins can share
    one settings table.

    Args:
        schema (Type[T]): The Pydantic model class defining expected settings.

    Returns:
        T: An instance of the schema model populated with runtime values.

    Raises:
        ConfigurationError: If the relevant settings fail validation.
    """
    relevant_keys = schema.model_fields.keys()
    subset = {k: v for k, v in self.plugin_settings.items() if k in relevant_keys}
    try:
      return schema.model_validate(subset)
    except ValidationError as e:
      raise ConfigurationError(f"Plugin configuration validation failed: {e}") from e

  @classmethod
  def load(
    cls,
    parser: Optional[str] = None,
    plugins: Optional[List[str]] = None,
    plugin_settings: Optional[Dict[str, Any]] = None,
    trace: Optional[bool] = None,
    search_path: Optional[Path] = None,
  ) -> "RetextConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Args:
        parser (Optional[str]): Override for the parser key.
        plugins (Optional[List[str]]): Override for the plugin list.
        plugin_settings (Optional[Dict]): Settings merged over the TOML ones.
        trace (Optional[bool]): Override for tracing.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RetextConfig: The fully resolved configuration object.

    Raises:
        ConfigurationError: If the merged settings are invalid.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    final_parser = parser or toml_config.get("parser", DEFAULT_PARSER)
    final_plugins = plugins if plugins is not None else toml_config.get("plugins", [])
    final_trace = trace if trace is not None else toml_config.get("trace", False)

    toml_settings = toml_config.get("plugin_settings", {})
    final_settings = {**toml_settings, **(plugin_settings or {})}

    raw_paths = toml_config.get("plugin_paths", [])
    if toml_dir:
      final_paths = [(toml_dir / Path(p)).resolve() for p in raw_paths]
    else:
      final_paths = [Path(p).resolve() for p in raw_paths]

    try:
      return cls(
        parser=final_parser,
        plugins=final_plugins,
        plugin_settings=final_settings,
        plugin_paths=final_paths,
        trace=final_trace,
      )
    except ValidationError as e:
      raise ConfigurationError(f"Invalid retext configuration: {e}") from e


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts `[tool.retext]`.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.

  Raises:
      ConfigurationError: If the nearest pyproject.toml is not valid TOML.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Could not read {toml_path}: {e}") from e

      return data.get("tool", {}).get("retext", {}), parent

  return {}, None
