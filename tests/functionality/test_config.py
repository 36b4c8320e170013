"""
Tests for StyleConfig validation and defaults.
"""

import pytest
from pydantic import ValidationError

from directive_styler.config import DEFAULT_MODULEDOC_SKIP_SUFFIXES, StyleConfig
from directive_styler.known_modules import ELIXIR_STDLIB_MODULES


def test_defaults():
  cfg = StyleConfig()
  assert cfg.alias_lifting_exclude == frozenset()
  assert cfg.stdlib_modules == frozenset()
  assert cfg.moduledoc_skip_suffixes == DEFAULT_MODULEDOC_SKIP_SUFFIXES
  assert cfg.lift_aliases is True


def test_names_are_normalized():
  """Atoms and `Elixir.` prefixes name the same module."""
  cfg = StyleConfig(alias_lifting_exclude=[":Repo", "Elixir.Schema", " Query ", ""])
  assert cfg.alias_lifting_exclude == frozenset({"Repo", "Schema", "Query"})


def test_single_name_is_accepted():
  assert StyleConfig(alias_lifting_exclude="Repo").alias_lifting_exclude == frozenset({"Repo"})
  assert StyleConfig(moduledoc_skip_suffixes="Impl").moduledoc_skip_suffixes == ("Impl",)


def test_with_stdlib():
  cfg = StyleConfig.with_stdlib(extra=["MyKernel"], lift_aliases=False)
  assert ELIXIR_STDLIB_MODULES <= cfg.stdlib_modules
  assert "MyKernel" in cfg.stdlib_modules
  assert {"List", "String", "Supervisor"} <= cfg.stdlib_modules
  assert cfg.lift_aliases is False


def test_config_is_frozen():
  cfg = StyleConfig()
  with pytest.raises(ValidationError):
    cfg.lift_aliases = False


def test_invalid_values_are_rejected():
  with pytest.raises(ValidationError):
    StyleConfig(lift_aliases="sometimes")
