"""
Runtime Configuration Store.

The styling engine reads every tunable from an explicit ``StyleConfig`` value
threaded through the per-run context; nothing is held in module globals.
Loading the configuration from files is the caller's concern.
"""

from typing import Any, FrozenSet, Iterable, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from directive_styler.known_modules import ELIXIR_STDLIB_MODULES

# Module names ending with these suffixes do not get a default `@moduledoc false`.
DEFAULT_MODULEDOC_SKIP_SUFFIXES: Tuple[str, ...] = (
  "Test",
  "Mixfile",
  "MixProject",
  "Controller",
  "Endpoint",
  "Repo",
  "Router",
  "Socket",
  "View",
  "HTML",
  "JSON",
)


def _normalize_module_name(name: str) -> str:
  name = name.strip()
  if name.startswith(":"):
    name = name[1:]
  if name.startswith("Elixir."):
    name = name[len("Elixir.") :]
  return name


class StyleConfig(BaseModel):
  """
  Configuration container for the styling engine.
  """

  model_config = ConfigDict(frozen=True)

  alias_lifting_exclude: FrozenSet[str] = Field(
    default_factory=frozenset, description="Short names that must never be introduced as lifted aliases."
  )
  stdlib_modules: FrozenSet[str] = Field(
    default_factory=frozenset, description="Standard-library top-level module names that lifted aliases may not shadow."
  )
  moduledoc_skip_suffixes: Tuple[str, ...] = Field(
    DEFAULT_MODULEDOC_SKIP_SUFFIXES, description="Module name suffixes exempt from `@moduledoc false` synthesis."
  )
  lift_aliases: bool = Field(True, description="If True, repeated deep alias chains are lifted into `alias` directives.")

  @field_validator("alias_lifting_exclude", "stdlib_modules", mode="before")
  @classmethod
  def normalize_names(cls, v: Any) -> FrozenSet[str]:
    """
    Accepts any iterable of names (or a single name) and normalizes each.

    ``:Foo`` and ``Elixir.Foo`` both become ``Foo``.

    Args:
        v: Raw value.

    Returns:
        FrozenSet[str]: Normalized names.
    """
    if v is None:
      return frozenset()
    if isinstance(v, str):
      v = [v]
    return frozenset(_normalize_module_name(str(n)) for n in v if str(n).strip())

  @field_validator("moduledoc_skip_suffixes", mode="before")
  @classmethod
  def normalize_suffixes(cls, v: Any) -> Tuple[str, ...]:
    if isinstance(v, str):
      return (v,)
    return tuple(v)

  @classmethod
  def with_stdlib(cls, extra: Iterable[str] = (), **overrides: Any) -> "StyleConfig":
    """
    Builds a config whose standard-library collision set is the packaged
    Elixir module list, plus ``extra`` names.

    Args:
        extra: Additional names treated as standard library.
        **overrides: Any other ``StyleConfig`` fields.

    Returns:
        StyleConfig: The configuration.
    """
    return cls(stdlib_modules=ELIXIR_STDLIB_MODULES | frozenset(extra), **overrides)
