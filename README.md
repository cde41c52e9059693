# keypaddle

Tools for a programmable key paddle. Every switch has a "down" macro and an
"up" macro. You write macros in a small text language. They are stored as
compact byte sequences, where single control bytes press and release
modifier keys.

## The macro language

- Plain single characters: `a`, `1`, `/`
- Quoted strings: `"hello world\n"`. The escapes are `\n`, `\r`, `\t`, `\"`
  and `\\`. `\a` is dropped, and any other backslash pair is kept as written.
- Named keys (any case): `F1`…`F12`, `UP`, `DOWN`, `LEFT`, `RIGHT`, `HOME`,
  `END`, `PAGEUP`, `PAGEDOWN`, `DELETE`/`DEL`, `ENTER`, `TAB`,
  `ESC`/`ESCAPE`, `BACKSPACE`, `SPACE`
- Modifier chords: `CTRL+C`, `CTRL+SHIFT+ESC`, or `CTRL TAB`. In the last
  form the modifier is held for the next token only. If the next token is a
  quoted string, it is held for the string's first character only.
- Explicit holds: `+SHIFT` presses a modifier and `-SHIFT` releases it.
- Modifier names in chords and holds: `CTRL`, `SHIFT`, `ALT`, `WIN`, `GUI`.

An encoded macro may be at most 256 bytes long. Encoding raises
`MacroEncodeError` in three cases:

- the input is empty (`Missing macro sequence`)
- the input contains an unknown keyword (`Unknown token`)
- the output would be longer than 256 bytes (`Macro too long`)

## Library use

```python
from keypaddle.encode import macro_encode, MacroEncodeError
from keypaddle.decode import macro_decode
from keypaddle.engine import RecordingKeyboard, execute_macro

data = macro_encode('CTRL+C "hello" ENTER')
print(macro_decode(data))          # human-readable form of the bytes

keyboard = RecordingKeyboard()
execute_macro(data, keyboard)      # calls press/release/write for each step
print(keyboard.events)             # [("press", ...), ("write", ...), ...]

try:
    macro_encode("NOSUCHKEY")
except MacroEncodeError as exc:
    print(exc)                     # Unknown token
```

Modules:

- `keypaddle.tables`: the control codes, the key code constants and the
  `Modifier` flags. It also has the keyword lookups
  `find_hid_code_for_keyword`, `find_keyword_for_hid` and
  `find_modifier_bit`.
- `keypaddle.encode`: `macro_encode`, which turns text into bytes.
- `keypaddle.decode`: `macro_decode`, which turns bytes into text.
  - Bytes it does not recognise are shown as `[0xNN]`.
  - Empty input gives `(empty)`.
- `keypaddle.engine`: `execute_macro(data, keyboard)`.
  - It plays a macro on any object that has `press`, `release` and `write`
    methods.
  - `RecordingKeyboard` records those calls.
- `keypaddle.storage`: `MacroStorage` holds a `SwitchMacros` (`down`, `up`)
  for each switch, 24 by default. It is backed by a writable byte image.
  - `load()` and `save()` raise `StorageError` when the image has no valid
    magic number or is too small.
  - `reset()` clears every macro.
- `keypaddle.switches`: `SwitchBank` turns raw port readings into a switch
  bitmap, with a debounce time of 50 ms.
  - You supply a `read_port(letter)` callable for ports B, C, D and F, and a
    millisecond `clock()`.
  - A low pin reads as a pressed switch.
- `keypaddle.console`:
  - `CommandInterface` runs text commands against a `MacroStorage`.
  - `LineReader` builds command lines from typed characters. It handles
    backspace and a 127-character limit.

## Console

```
keypaddle [--eeprom FILE]
```

This reads commands from standard input:

```
HELP                     show the command list
SHOW <key|ALL> [up]      show macro(s)
MAP <key> [up] <macro>   set a macro
CLEAR <key> [up]         clear a macro
LOAD                     load macros from the image
SAVE                     save macros to the image
STAT                     show the switch bitmap
```

Keys are numbered 0–23. The direction is `down` unless you give `up`.

With `--eeprom FILE`, the image is read from FILE if it exists. The image is
written back to FILE after every command. Without the option, the console
uses a blank 1024-byte image held in memory only.

## What it does not do

- The package does not send key strokes to the operating system, and it does
  not read physical switch pins.
  - `execute_macro` only calls the keyboard object you pass in.
  - `SwitchBank` only reads the port values your callable returns.
- The console is not connected to any switches, so `STAT` always reports
  `0x0`.

## Tests

```
pip install keypaddle[test]
pytest
```