"""
Tests for Alias Lifting.

Verifies:
1. Repeated deep references are promoted to an alias and shortened.
2. Every collision rule vetoes the lift (exclusions, standard library,
   existing aliases, other references, submodules, captured references).
3. Nested modules and quote regions are independent scopes.
"""

from collections import Counter

import pytest

from directive_styler.config import StyleConfig
from directive_styler.core.alias_env import AliasEnv
from directive_styler.core.builders import aliases, attr, binop, call, def_, defmodule, directive, quote, remote, var
from directive_styler.core.directives.alias_lifting import AliasLifter, LiftCandidate, submodule_names
from directive_styler.core.engine import StyleEngine
from directive_styler.core.nodes import Aliases, Call, RemoteCall
from directive_styler.core.tracer import TraceEventType


def module(name, *body):
  """A documented module, so only lifting can change it."""
  return defmodule(name, attr("moduledoc", False), *body)


def twice(chain):
  return def_("a", remote(chain, "f")), def_("b", remote(chain, "f"))


class TestAliasLifter:
  def test_plan_promotes_repeated_chains(self):
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    statements = [remote("A.B.C", "f"), remote("A.B.C", "f"), *(remote("X.Y.Z", "h") for _ in range(3))]
    assert lifter.plan(statements, []) == [
      LiftCandidate(("A", "B", "C"), ("A", "B", "C"), 2),
      LiftCandidate(("X", "Y", "Z"), ("X", "Y", "Z"), 3),
    ]

  def test_plan_counts_full_references(self):
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    statements = [remote("A.B.C", "foo"), remote("A.B.C", "baz"), aliases("X.Y.Z"), remote("X.Y.Z", "f")]
    assert lifter.plan(statements, []) == []

  def test_candidate_directive(self):
    candidate = LiftCandidate(("Bar", "Baz", "Qux"), ("Foo", "Bar", "Baz", "Qux"), 2)
    assert candidate.name == "Qux"
    assert candidate.directive() == Call("alias", (Aliases(("Foo", "Bar", "Baz", "Qux")),))

  def test_candidates_subtract_aliased_prefix(self):
    env = AliasEnv().define(directive("alias", "Foo.Bar"))
    lifter = AliasLifter(StyleConfig(), env)
    chains = Counter({("Bar", "Baz", "Qux"): 2, ("Bar", "Baz", "Qux", "Deep"): 3, ("X", "Y", "Z"): 1})
    assert lifter.candidates(chains) == [
      LiftCandidate(("Bar", "Baz", "Qux", "Deep"), ("Foo", "Bar", "Baz", "Qux", "Deep"), 3),
    ]

  def test_lift_rewrites_occurrences(self):
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    typespec = attr("spec", binop("::", call("f"), remote("A.B.C", "t")))
    statements = [typespec, remote("A.B.C", "f"), call("run", remote("A.B.C", "f")), remote("A.B.C", "g")]

    new_aliases, rewritten = lifter.lift(statements, [])

    assert new_aliases == [Call("alias", (Aliases(("A", "B", "C")),))]
    # attribute assignments are left as written
    assert rewritten[0] is typespec
    assert rewritten[1] == RemoteCall(Aliases(("C",)), "f", ())
    assert rewritten[2] == call("run", RemoteCall(Aliases(("C",)), "f", ()))
    # every occurrence of the module is shortened, not only the repeated call
    assert rewritten[3] == RemoteCall(Aliases(("C",)), "g", ())

  def test_lift_without_candidates_returns_input(self):
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    statements = [remote("A.B.C", "f")]
    assert lifter.lift(statements, []) == ([], statements)

  @pytest.mark.parametrize(
    "config, env, statements, reason",
    [
      (StyleConfig(alias_lifting_exclude={"C"}), AliasEnv(), [], "excluded"),
      (StyleConfig(stdlib_modules={"C"}), AliasEnv(), [], "standard library"),
      (StyleConfig(), AliasEnv().define(directive("alias", "Other.C")), [], "already aliased"),
      (StyleConfig(), AliasEnv(), [def_("x", directive("alias", "Other.C"))], "already aliased"),
      (StyleConfig(), AliasEnv(), [def_("x", directive("alias", "Other.A"))], "aliased in a nested block"),
      (StyleConfig(), AliasEnv(), [defmodule("C.Impl", call("f"))], "collides with a submodule"),
      (StyleConfig(), AliasEnv(), [remote("C.Other", "f")], "captures another reference"),
    ],
  )
  def test_veto_reasons(self, config, env, statements, reason):
    candidate = LiftCandidate(("A", "B", "C"), ("A", "B", "C"), 2)
    lifter = AliasLifter(config, env)
    assert lifter.veto_reason(candidate, statements, [], [candidate.chain]) == reason

  def test_veto_name_collisions(self):
    candidate = LiftCandidate(("A", "B", "C"), ("A", "B", "C"), 2)
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    chains = [("A", "B", "C"), ("X", "Y", "C")]
    assert lifter.veto_reason(candidate, [], [], chains) == "collides with another reference"

  def test_veto_self_shadowing(self):
    candidate = LiftCandidate(("C", "D", "C"), ("C", "D", "C"), 2)
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    assert lifter.veto_reason(candidate, [], [], [candidate.chain]) == "shadows itself"

  def test_directives_can_be_captured(self):
    candidate = LiftCandidate(("A", "B", "C"), ("A", "B", "C"), 2)
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    directives = [directive("import", "C.Helpers")]
    assert lifter.veto_reason(candidate, [], directives, [candidate.chain]) == "captures another reference"

  def test_safe_candidate(self):
    candidate = LiftCandidate(("A", "B", "C"), ("A", "B", "C"), 2)
    lifter = AliasLifter(StyleConfig(), AliasEnv())
    assert lifter.veto_reason(candidate, [remote("A.B.C", "f")], [], [candidate.chain]) is None


def test_submodule_names():
  statements = [defmodule("C.Impl", call("f")), defmodule(var("dynamic"), call("g")), call("defmodule")]
  assert submodule_names(statements) == {"C"}


def test_repeated_reference_is_lifted(assert_style):
  assert_style(
    module("NuhUh", *twice("A.B.C")),
    """
    defmodule NuhUh do
      @moduledoc false
      alias A.B.C
      def a() do
        C.f()
      end
      def b() do
        C.f()
      end
    end
    """,
  )


def test_several_lifts_are_sorted_with_existing_aliases(assert_style):
  tree = module(
    "Multi",
    directive("alias", "Foo.Mid"),
    def_("a", remote("X.Y.Zed", "f"), remote("A.B.C", "f")),
    def_("b", remote("X.Y.Zed", "f"), remote("A.B.C", "f")),
  )
  assert_style(
    tree,
    """
    defmodule Multi do
      @moduledoc false
      alias A.B.C
      alias Foo.Mid
      alias X.Y.Zed
      def a() do
        Zed.f()
        C.f()
      end
      def b() do
        Zed.f()
        C.f()
      end
    end
    """,
  )


def test_lift_through_existing_alias(assert_style):
  tree = module("Foo", directive("alias", "Foo.Bar"), *twice("Bar.Baz.Qux.Deep"))
  assert_style(
    tree,
    """
    defmodule Foo do
      @moduledoc false
      alias Foo.Bar
      alias Foo.Bar.Baz.Qux.Deep
      def a() do
        Deep.f()
      end
      def b() do
        Deep.f()
      end
    end
    """,
  )


def test_chains_covered_by_an_alias_are_not_lifted(assert_style):
  assert_style(module("Foo", directive("alias", "Foo.Bar"), *twice("Bar.Baz.Qux")))


def test_exclusion_config(assert_style):
  """An excluded name is never introduced."""
  config = StyleConfig.with_stdlib(alias_lifting_exclude={"C"})
  assert_style(module("Foo", directive("alias", "Foo.Bar"), *twice("A.B.C")), config=config)


def test_standard_library_names(assert_style):
  tree = module(
    "Foo",
    def_("a", remote("My.Sweet.List", "foo"), remote("IHave.MyOwn.Supervisor", "init")),
    def_("b", remote("My.Sweet.List", "foo"), remote("IHave.MyOwn.Supervisor", "init")),
  )
  assert_style(tree)


@pytest.mark.parametrize("existing", [directive("alias", "A.C"), directive("alias", "A.B", as_="C")])
def test_existing_alias_collision(assert_style, existing):
  assert_style(module("Foo", existing, *twice("A.B.C")))


def test_submodule_collision(assert_style):
  tree = module(
    "A",
    remote("A.B.C", "f"),
    remote("A.B.C", "f"),
    module("C", remote("A.B.C", "f")),
    remote("A.B.C", "f"),
  )
  assert_style(tree)


def test_quote_regions_do_not_count(assert_style):
  assert_style(module("Foo", quote(remote("A.B.C", "f"), remote("A.B.C", "f"))))
  assert_style(module("Foo", def_("q", quote(remote("A.B.C", "f"), remote("A.B.C", "f")))))


@pytest.mark.parametrize("other_calls", [1, 2])
def test_same_name_in_another_reference(assert_style, other_calls):
  others = [remote("X.Y.C", "h") for _ in range(other_calls)]
  assert_style(module("Foo", *twice("A.B.C"), *others))
  assert_style(module("Foo", *others, *twice("A.B.C")))


def test_reference_capture(assert_style):
  assert_style(module("Foo", *twice("A.B.C"), remote("C.Other", "g")))


def test_self_shadowing_chain(assert_style):
  assert_style(module("Foo", *twice("C.D.C")))


def test_attribute_values_are_not_counted(assert_style):
  typespec = attr("spec", binop("::", call("f"), remote("A.B.C", "t")))
  assert_style(module("Foo", typespec, def_("f", remote("A.B.C", "t"))))


def test_dynamic_segments_are_ignored(assert_style):
  dynamic = Aliases(("Some", call("unquote", var("x")), "Alias"))
  assert_style(module("Foo", RemoteCall(dynamic, "f", ()), RemoteCall(dynamic, "f", ())))


def test_nested_modules_are_independent(assert_style):
  tree = module(
    "Outer",
    def_("a", remote("A.B.C", "f")),
    module("Inner", def_("b", remote("A.B.C", "g"), remote("A.B.C", "g"))),
  )
  assert_style(
    tree,
    """
    defmodule Outer do
      @moduledoc false
      def a() do
        A.B.C.f()
      end
      defmodule Inner do
        @moduledoc false
        alias A.B.C
        def b() do
          C.g()
          C.g()
        end
      end
    end
    """,
  )


def test_different_calls_on_one_module_are_not_repeats(assert_style):
  tree = defmodule("A", def_("lift_me", remote("A.B.C", "foo"), remote("A.B.C", "baz")))
  assert_style(
    tree,
    """
    defmodule A do
      @moduledoc false
      def lift_me() do
        A.B.C.foo()
        A.B.C.baz()
      end
    end
    """,
  )
  assert_style(module("A", def_("lift_me", remote("A.B.C", "foo"), remote("A.B.C", "baz"))))


def test_spec_and_call_are_not_repeats(assert_style):
  typespec = attr("spec", binop("::", call("bar"), remote("A.B.C", "t")))
  assert_style(module("A", typespec, def_("bar", remote("A.B.C", "f"))))


def test_only_child_with_a_repeated_call_is_lifted(assert_style):
  tree = defmodule("Foo", def_("a", remote("A.B.C", "f"), remote("A.B.C", "f")))
  assert_style(
    tree,
    """
    defmodule Foo do
      @moduledoc false
      alias A.B.C
      def a() do
        C.f()
        C.f()
      end
    end
    """,
  )


def test_references_through_a_function_alias_are_kept(assert_style):
  """``A.B.C`` means ``X.A.B.C`` inside ``run``; a module-level alias would change that."""
  tree = module("M", def_("run", directive("alias", "X.A"), remote("A.B.C", "f"), remote("A.B.C", "f")))
  assert_style(tree)


def test_undocumented_only_child_is_not_organized(assert_style):
  assert_style(defmodule("FooTest", def_("a", remote("A.B.C", "f"), remote("A.B.C", "f"))))


def test_lifting_can_be_disabled(assert_style):
  assert_style(module("Foo", *twice("A.B.C")), config=StyleConfig(lift_aliases=False))


def test_lifts_outside_modules_are_not_attempted(assert_style):
  tree = def_("run", directive("require", "Logger"), remote("A.B.C", "f"), remote("A.B.C", "f"))
  assert_style(tree)


def test_decisions_are_traced(config):
  tree = module("Foo", *twice("A.B.C"), *twice("My.Sweet.List"))
  result = StyleEngine(config).run(tree)

  lifts = [e for e in result.trace_events if e["type"] == TraceEventType.ALIAS_LIFT]
  assert [e["metadata"] for e in lifts] == [{"chain": "A.B.C", "alias": "C", "occurrences": 2}]

  skipped = [e for e in result.trace_events if e["type"] == TraceEventType.INSPECTION]
  assert [e["metadata"]["detail"] for e in skipped] == ["standard library"]
