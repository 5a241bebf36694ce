import re

import pytest

from quicklang.commands.registry import CommandInfo, CommandRegistry, CommandSpec, TriggerSpec
from quicklang.commands.triggers import LiteralTrigger, PatternTrigger, as_trigger
from quicklang.exceptions import DuplicateCommandError


async def _noop(message, match):
    return None


def test_list_commands_in_registration_order():
    registry = CommandRegistry()
    for name in ["start", "help", "about", "addenglishword"]:
        registry.register_command(CommandSpec(name=name, description=name.upper(), handler=_noop))

    assert registry.list_commands() == [
        CommandInfo("start", "START"),
        CommandInfo("help", "HELP"),
        CommandInfo("about", "ABOUT"),
        CommandInfo("addenglishword", "ADDENGLISHWORD"),
    ]


def test_list_commands_is_a_snapshot():
    registry = CommandRegistry()
    registry.register_command(CommandSpec(name="start", description="Start", handler=_noop))
    snapshot = registry.list_commands()
    registry.register_command(CommandSpec(name="help", description="Help", handler=_noop))

    assert len(snapshot) == 1
    assert len(registry.list_commands()) == 2


def test_empty_registry():
    registry = CommandRegistry()
    assert registry.list_commands() == []
    assert registry.triggers == ()


def test_duplicate_command_is_rejected():
    registry = CommandRegistry()
    registry.register_command(CommandSpec(name="start", description="first", handler=_noop))

    with pytest.raises(DuplicateCommandError):
        registry.register_command(CommandSpec(name="START", description="second", handler=_noop))

    assert [c.description for c in registry.commands] == ["first"]


def test_leading_slash_and_case_are_normalized():
    registry = CommandRegistry()
    registry.register_command(CommandSpec(name="/Help", description="Help", handler=_noop))

    assert registry.get("help").name == "help"
    assert registry.get("HELP") is registry.get("help")


@pytest.mark.parametrize("name", ["", "with space", "dash-name", "a" * 33, "ünï"])
def test_invalid_command_name(name):
    with pytest.raises(ValueError):
        CommandRegistry().register_command(CommandSpec(name=name, description="x", handler=_noop))


def test_get_unknown_command():
    assert CommandRegistry().get("missing") is None


def test_register_trigger_wraps_bare_values():
    registry = CommandRegistry()
    registry.register_trigger(TriggerSpec(trigger="hello", handler=_noop))
    registry.register_trigger(TriggerSpec(trigger=re.compile(r"^bye"), handler=_noop))

    first, second = registry.triggers
    assert first.trigger == LiteralTrigger("hello")
    assert isinstance(second.trigger, PatternTrigger)


def test_as_trigger_rejects_other_types():
    with pytest.raises(TypeError):
        as_trigger(42)


def test_literal_trigger_rejects_empty_text():
    with pytest.raises(ValueError):
        LiteralTrigger("")


def test_literal_trigger_matching():
    trigger = LiteralTrigger("hello")
    assert trigger.matches("Say HELLO now")
    assert not trigger.matches("help")


def test_pattern_trigger_uses_search():
    trigger = PatternTrigger(re.compile(r"thanks", re.IGNORECASE))
    assert trigger.matches("ok, THANKS!") is not None
    assert trigger.matches("nope") is None
