# unimft

`unimft` turns a small JSON description of a unikernel's devices into a C
source file that defines the binary application manifest. You compile the
generated file with your unikernel toolchain and link it into the image.

## Installing

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## The command

```
unimft gen SOURCE OUTPUT
```

reads the JSON manifest in `SOURCE` and writes C source to `OUTPUT`. Any
other command line prints a usage message and exits with status 1; so does
an invalid manifest, after printing the reason, prefixed with the source
path. `OUTPUT` is opened before `SOURCE` is read, so it is created (and may
be left empty) even when the manifest turns out to be invalid.

The JSON document must be an object with exactly two keys:

- `version`: an integer, which must equal the manifest format version (1);
- `devices`: an array of objects, each with a `name` and a `type` string.

```json
{
  "version": 1,
  "devices": [
    { "name": "service", "type": "NET_BASIC" },
    { "name": "storage", "type": "BLOCK_BASIC" }
  ]
}
```

Device names must be non-empty, made of ASCII letters and digits only, and
at most 67 bytes long; at most 64 devices are allowed. Unknown keys, missing
keys, values of the wrong JSON type and a wrong version are all rejected
with a message that points at the offending part of the document, such as
`.devices[...]: missing .type`. Each `type` is written out as `MFT_<type>`
in the generated source; its value is not checked.

## Using it from Python

- `unimft.manifest` holds `load_manifest(stream, limits=None)`, which reads
  and validates a JSON manifest from a text or binary stream and returns a
  list of `DeviceEntry` records (`name`, `type`); `ManifestLimits` sets the
  expected `version`, `max_entries` and `name_max` (defaults 1, 64 and 67).
  `render_manifest(entries)` returns the C source text, `generate(source,
  output, limits=None)` does both between two file paths, and `main(argv=None)`
  is the command above, returning the exit status. Problems are raised as
  `ManifestError`, JSON syntax errors included.
- `unimft.jsonparse` holds the JSON reader behind it: `parse` reads one value
  from a text or binary stream and `parse_text` from a string or bytes. Any
  value may stand at the top level and whatever follows it is left unread.
  Inside arrays and objects a missing comma between items, or extra commas
  after the first item, are tolerated. `\u` escapes are each written as
  UTF-8 on their own, without pairing surrogates. Syntax errors raise
  `JsonParseError`, whose `line` names the line where they occurred, or is
  `None` when the input ended too early.
- `unimft.jsontree` holds the parsed tree: each `JsonValue` carries a
  `JsonType` in `kind`, its content in `value` and, inside an object, the
  member key in `name`. Numbers stay as their source text (`NUMBER`) until
  `JsonValue.update` converts them, in place and through the whole tree, to
  `INT` (clamped to the signed 64-bit range) or `REAL` (a float);
  `is_integer_text` decides which, by the absence of a decimal point or
  exponent.
- `unimft.utf8` holds `encode_codepoint`, which encodes a code point up to
  `0x7FFFFFF`, using the old five and six byte forms above `0x1FFFFF`, and
  raises `CodepointRangeError` for negative or larger values.
- `unimft.clock` holds small calendar helpers: `bcd_to_bin` decodes a
  binary-coded decimal byte, `is_leap_year` answers for Gregorian years,
  `days_in_month` gives the days of a month in a common year (or -1 for a
  month outside 1 to 12), and `ymdhms_to_secs` converts a `DateTimeFields`
  value (`year`, `month`, `day`, `hour`, `minute`, `second`) to seconds since
  1970-01-01 00:00:00 UTC. Years before 1970 give 0, and the result wraps
  at 2**64.

## What it does not do

`unimft` only generates manifests. It cannot read a manifest back out of a
built binary, and it does not compile the generated source or check that a
device `type` is one the unikernel supports.