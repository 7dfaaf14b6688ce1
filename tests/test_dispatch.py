import logging

from mudclient.patterns import (
    Command,
    DispatchPolicy,
    Rule,
    Variable,
    Wait,
    dispatch,
    process_aliases,
    process_triggers,
)


def test_no_matching_alias_returns_none():
    aliases = [Rule(name="test", pattern="^test$", command='send("test command")')]
    assert process_aliases("nomatch", aliases, []) is None


def test_simple_send():
    aliases = [Rule(name="test", pattern="^t$", command='send("X")')]
    assert process_aliases("t", aliases, []) == [Command(content="X")]


def test_wait_action():
    aliases = [Rule(name="wait", pattern="^w$", command="wait(500)")]
    result = process_aliases("w", aliases, [])
    assert result == [Wait(wait_time=500)]
    assert result[0].to_dict() == {"type": "wait", "content": "", "waitTime": 500}


def test_end_to_end_capture_groups():
    aliases = [
        Rule(
            name="give",
            pattern="^g (.+)$",
            command='send("enter"); send(f"give tianji {matches[1]}")',
        )
    ]
    result = process_aliases("g wineskin", aliases, [])
    assert [action.to_dict() for action in result] == [
        {"type": "command", "content": "enter"},
        {"type": "command", "content": "give tianji wineskin"},
    ]


def test_multiline_script_with_variables():
    aliases = [
        Rule(
            name="combat sequence",
            pattern=r"^attack (.+)$",
            command="""
                target = matches[1]
                send(f"wield {weapon}")
                wait(500)
                send(f"cast 'armor' self")
                wait(1000)
                if target != "friend":
                    send(f"attack {target}")
            """,
        )
    ]
    variables = [Variable(name="weapon", value="longsword")]

    result = process_aliases("attack goblin", aliases, variables)

    assert result == [
        Command(content="wield longsword"),
        Wait(wait_time=500),
        Command(content="cast 'armor' self"),
        Wait(wait_time=1000),
        Command(content="attack goblin"),
    ]


def test_send_all_keeps_argument_order():
    aliases = [Rule(name="buff", pattern="^buff$", command='sendAll("a", "b", "c")')]
    assert process_aliases("buff", aliases, []) == [
        Command(content="a"), Command(content="b"), Command(content="c"),
    ]


def test_pattern_is_not_anchored():
    aliases = [Rule(name="loose", pattern="ell", command='send(matches[0])')]
    assert process_aliases("hello", aliases, []) == [Command(content="ell")]


def test_unmatched_group_is_none():
    aliases = [Rule(name="opt", pattern="^(a)?b$", command="send(str(matches[1]))")]
    assert process_aliases("b", aliases, []) == [Command(content="None")]


def test_first_match_stops_at_first_rule():
    aliases = [
        Rule(name="first", pattern="^go", command='send("first")'),
        Rule(name="second", pattern="^go", command='send("second")'),
    ]
    assert process_aliases("go", aliases, []) == [Command(content="first")]


def test_disabled_rules_never_match():
    aliases = [
        Rule(name="off", pattern=".*", command='send("off")', enabled=False),
        Rule(name="on", pattern="^x$", command='send("on")'),
    ]
    assert process_aliases("x", aliases, []) == [Command(content="on")]
    assert process_aliases("y", aliases, []) is None


def test_matching_rule_that_sends_nothing_returns_none():
    aliases = [Rule(name="noop", pattern="^x$", command="pass")]
    assert process_aliases("x", aliases, []) is None


def test_unbound_variable_excludes_rule(caplog):
    aliases = [Rule(name="broken", pattern="^x$", command="send(missing_var)")]
    with caplog.at_level(logging.ERROR):
        assert process_aliases("x", aliases, []) is None
    assert any("broken" in rec.getMessage() and "missing_var" in rec.getMessage() for rec in caplog.records)


def test_failing_first_match_does_not_fall_through():
    aliases = [
        Rule(name="broken", pattern="^x$", command='send("partial"); raise ValueError("boom")'),
        Rule(name="fallback", pattern="^x$", command='send("fallback")'),
    ]
    assert process_aliases("x", aliases, []) is None


def test_invalid_pattern_is_skipped(caplog):
    aliases = [
        Rule(name="bad", pattern="(unclosed", command='send("bad")'),
        Rule(name="good", pattern="^x$", command='send("good")'),
    ]
    with caplog.at_level(logging.WARNING):
        assert process_aliases("x", aliases, []) == [Command(content="good")]
    assert any("bad" in rec.getMessage() for rec in caplog.records if rec.levelno == logging.WARNING)


def test_syntax_error_in_script_is_caught():
    aliases = [Rule(name="syntax", pattern="^x$", command="send(")]
    assert process_aliases("x", aliases, []) is None


def test_script_cannot_import():
    aliases = [Rule(name="evil", pattern="^x$", command='import os\nsend("ran")')]
    assert process_aliases("x", aliases, []) is None


def test_script_cannot_reach_interpreter_internals(caplog):
    escape = (
        "w = [c for c in ().__class__.__base__.__subclasses__() if c.__name__ == '_wrap_close'][0]\n"
        "send(w.__init__.__globals__['getcwd']())"
    )
    aliases = [Rule(name="escape", pattern="^x$", command=escape)]
    with caplog.at_level(logging.ERROR):
        assert process_aliases("x", aliases, []) is None
    assert any("NameError" in rec.getMessage() and "não permitido" in rec.getMessage() for rec in caplog.records)


def test_underscore_names_are_rejected():
    for command in ("send(__name__)", "_x = 1\nsend(_x)", "f = lambda _a: _a\nsend(f(1))"):
        aliases = [Rule(name="under", pattern="^x$", command=command)]
        assert process_aliases("x", aliases, []) is None


def test_builtins_changes_do_not_leak_into_later_rules():
    tamper = [Rule(name="tamper", pattern="^x$", command='__builtins__["len"] = lambda o: 99')]
    assert process_aliases("x", tamper, []) is None

    shadow = [Rule(name="shadow", pattern="^x$", command="len = lambda o: 99\nsend(str(len('ab')))")]
    assert process_aliases("x", shadow, []) == [Command(content="99")]

    check = [Rule(name="check", pattern="^x$", command='send(str(len("ab")))')]
    assert process_aliases("x", check, []) == [Command(content="2")]


def test_triggers_accumulate_in_rule_order():
    triggers = [
        Rule(name="hp", pattern="HP: (\\d+)", command='send(f"hp {matches[1]}")'),
        Rule(name="never", pattern="^zzz$", command='send("never")'),
        Rule(name="any", pattern="HP", command='send("drink"); wait(100)'),
    ]
    result = process_triggers("HP: 10", triggers, [])
    assert result == [Command(content="hp 10"), Command(content="drink"), Wait(wait_time=100)]


def test_trigger_failure_keeps_other_rules(caplog):
    triggers = [
        Rule(name="ok", pattern="orc", command='send("kill orc")'),
        Rule(name="broken", pattern="orc", command='send("partial"); raise ValueError("boom")'),
        Rule(name="after", pattern="orc", command='send("flee")'),
    ]
    with caplog.at_level(logging.ERROR):
        result = process_triggers("An orc arrives.", triggers, [])
    assert result == [Command(content="kill orc"), Command(content="flee")]
    assert any("broken" in rec.getMessage() and "boom" in rec.getMessage() for rec in caplog.records)


def test_triggers_with_no_match_return_none():
    triggers = [Rule(name="orc", pattern="orc", command='send("kill orc")')]
    assert process_triggers("A rabbit hops by.", triggers, []) is None


def test_trigger_line_is_normalized():
    triggers = [Rule(name="exact", pattern="^You are hungry\\.$", command='send("eat bread")')]
    line = "\x1b[1;33mYou are hungry.\x1b[0m\r\n> "
    assert process_triggers(line, triggers, []) == [Command(content="eat bread")]


def test_dispatch_policy_parameter():
    rules = [
        Rule(name="a", pattern="x", command='send("a")'),
        Rule(name="b", pattern="x", command='send("b")'),
    ]
    assert dispatch("x", rules, policy=DispatchPolicy.FIRST_MATCH) == [Command(content="a")]
    assert dispatch("x", rules, policy=DispatchPolicy.ACCUMULATE) == [Command(content="a"), Command(content="b")]
