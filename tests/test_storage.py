import pytest

from keypaddle.encode import macro_encode
from keypaddle.storage import (
    DATA_START,
    MAGIC_VALUE,
    MacroStorage,
    StorageError,
    SwitchMacros,
)
from keypaddle.tables import MAX_SWITCHES


def make_image(size=1024):
    return bytearray(size)


def test_new_storage_is_empty():
    storage = MacroStorage(make_image())
    assert len(storage.macros) == MAX_SWITCHES
    assert all(m == SwitchMacros() for m in storage.macros)


def test_save_load_round_trip():
    image = make_image()
    storage = MacroStorage(image)
    storage.macros[0].down = macro_encode("CTRL+c")
    storage.macros[0].up = macro_encode('"hello" ENTER')
    storage.macros[23].down = macro_encode("ALT+F4")
    storage.save()

    loaded = MacroStorage(image)
    loaded.load()
    assert loaded.macros == storage.macros


def test_magic_written_little_endian():
    image = make_image()
    MacroStorage(image).save()
    assert bytes(image[:DATA_START]) == MAGIC_VALUE.to_bytes(4, "little")


def test_empty_macros_written_as_terminators():
    image = make_image()
    MacroStorage(image).save()
    assert bytes(image[DATA_START:DATA_START + 2 * MAX_SWITCHES]) == bytes(
        2 * MAX_SWITCHES
    )


def test_load_blank_image_raises():
    storage = MacroStorage(make_image())
    storage.macros[0].down = b"x"
    with pytest.raises(StorageError):
        storage.load()
    assert storage.macros[0].down == b"x"


def test_load_replaces_existing_macros():
    image = make_image()
    MacroStorage(image).save()
    storage = MacroStorage(image)
    storage.macros[5].up = b"abc"
    storage.load()
    assert storage.macros[5].up is None


def test_save_into_small_image_raises():
    storage = MacroStorage(make_image(DATA_START + 2 * MAX_SWITCHES))
    with pytest.raises(StorageError):
        storage.save()


def test_save_image_without_room_for_magic_raises():
    with pytest.raises(StorageError):
        MacroStorage(make_image(2)).save()


def test_longest_macro_round_trips():
    image = make_image()
    storage = MacroStorage(image)
    storage.macros[0].down = b"a" * 254
    storage.save()
    loaded = MacroStorage(image)
    loaded.load()
    assert loaded.macros[0].down == b"a" * 254


def test_unterminated_macro_fails_to_load():
    image = make_image()
    storage = MacroStorage(image)
    storage.macros[0].down = b"a" * 255
    storage.save()
    with pytest.raises(StorageError):
        MacroStorage(image).load()


def test_partial_string_at_end_of_image_loads():
    image = bytearray(MAGIC_VALUE.to_bytes(4, "little") + b"ab")
    storage = MacroStorage(image)
    storage.load()
    assert storage.macros[0].down == b"ab"
    assert all(m.up is None for m in storage.macros)


def test_nul_in_macro_truncates_on_save():
    image = make_image()
    storage = MacroStorage(image)
    storage.macros[1].down = b"ab\0cd"
    storage.save()
    loaded = MacroStorage(image)
    loaded.load()
    assert loaded.macros[1].down == b"ab"


def test_custom_switch_count():
    image = make_image(64)
    storage = MacroStorage(image, 2)
    storage.macros[1].up = b"z"
    storage.save()
    loaded = MacroStorage(image, 2)
    loaded.load()
    assert loaded.macros == [SwitchMacros(), SwitchMacros(up=b"z")]


def test_reset_clears_all():
    storage = MacroStorage(make_image())
    storage.macros[3] = SwitchMacros(down=b"a", up=b"b")
    storage.reset()
    assert all(m == SwitchMacros() for m in storage.macros)