from motiontheremin.tools.debug import DEBUG_ENV_VAR, debug_enabled, time_block


def test_debug_flag_follows_environment(monkeypatch) -> None:
    monkeypatch.delenv(DEBUG_ENV_VAR, raising=False)
    assert not debug_enabled()
    monkeypatch.setenv(DEBUG_ENV_VAR, "yes")
    assert debug_enabled()
    monkeypatch.setenv(DEBUG_ENV_VAR, "0")
    assert not debug_enabled()


def test_time_block_only_emits_when_enabled(monkeypatch) -> None:
    messages: list[str] = []

    monkeypatch.setenv(DEBUG_ENV_VAR, "0")
    with time_block("quiet", emitter=messages.append):
        pass
    assert messages == []

    monkeypatch.setenv(DEBUG_ENV_VAR, "1")
    with time_block("loud", emitter=messages.append):
        pass
    assert len(messages) == 1
    assert "loud took" in messages[0]
