from quadkit.geometry import Vec2
from quadkit.input import Input, InputCharacter, KeyCode, KeyRepeat


def active_input(**kwargs):
    return Input(window_active=True, **kwargs)


def test_mouse_state_requires_active_window():
    assert active_input(mouse_down=True).is_mouse_down() is True
    assert Input(mouse_down=True).is_mouse_down() is False


def test_mouse_state_blocked_by_grabbed_cursor():
    state = active_input(mouse_down=True, mouse_pressed=True, mouse_released=True,
                         cursor_grabbed=True)
    assert state.is_mouse_down() is False
    assert state.click_down() is False
    assert state.click_up() is False


def test_clicks_when_available():
    state = active_input(mouse_pressed=True, mouse_released=True)
    assert state.click_down() is True
    assert state.click_up() is True


def test_reset_clears_frame_events_only():
    state = active_input(
        mouse_position=Vec2(3.0, 4.0),
        mouse_down=True,
        mouse_pressed=True,
        mouse_released=True,
        mouse_wheel=Vec2(0.0, 1.0),
        input_buffer=[InputCharacter("a")],
        modifier_ctrl=True,
        escape=True,
        enter=True,
    )
    state.reset()
    assert state.input_buffer == []
    assert state.mouse_wheel == Vec2(0.0, 0.0)
    assert not (state.mouse_pressed or state.mouse_released or state.escape or state.enter)
    assert not state.modifier_ctrl
    assert state.window_active is False
    assert state.mouse_down is True
    assert state.mouse_position == Vec2(3.0, 4.0)


def test_input_character_defaults():
    character = InputCharacter(KeyCode.ENTER)
    assert character.key is KeyCode.ENTER
    assert (character.modifier_shift, character.modifier_ctrl) == (False, False)


def test_key_repeat_fires_once_then_repeats_after_delay():
    repeat = KeyRepeat()
    assert repeat.add_repeat_gap(KeyCode.LEFT, 0.0) is True
    repeat.new_frame(0.0)
    assert repeat.add_repeat_gap(KeyCode.LEFT, 0.1) is False
    repeat.new_frame(0.1)
    assert repeat.add_repeat_gap(KeyCode.LEFT, 0.6) is False
    repeat.new_frame(0.6)
    assert repeat.add_repeat_gap(KeyCode.LEFT, 0.7) is True


def test_key_repeat_other_key_fires_immediately():
    repeat = KeyRepeat()
    repeat.add_repeat_gap(KeyCode.LEFT, 0.0)
    repeat.new_frame(0.0)
    assert repeat.add_repeat_gap(KeyCode.RIGHT, 0.1) is True


def test_key_repeat_release_resets():
    repeat = KeyRepeat()
    repeat.add_repeat_gap(KeyCode.UP, 0.0)
    repeat.new_frame(0.0)
    repeat.new_frame(0.1)  # key released
    assert repeat.add_repeat_gap(KeyCode.UP, 0.2) is True