# toktools

Building blocks for text tokenization pipelines:

- `toktools.template`: template pieces and templates such as
  `"[CLS] $A [SEP] $B:1 [SEP]:1"`, tables of special tokens, and
  `TemplateProcessing`, which holds the single and pair templates, counts the
  tokens they add and checks that they are complete.
- `toktools.settings`: truncation and padding settings (`TruncationParams`,
  `PaddingParams`, `PaddingStrategy`, `Range`), with readers for the
  `truncation` and `padding` sections of a `tokenizer.json` file.
- `toktools.spm`: reads a SentencePiece `precompiled_charsmap` (a double-array
  trie with rewrite rules) and normalizes text with it.
- `toktools.params`: `Params`, a small keyword-style parameter bag in which a
  value of `None` counts as absent.
- `toktools.slices` and `toktools.helpers`: list, string, file and iteration
  utilities.

## Installation

```
pip install .
```

The only run-time dependency is `regex`, used to split text into grapheme
clusters.

## Templates

```python
from toktools.template import TemplateProcessing, parse_piece

processor = (
    TemplateProcessing.default()
    .with_single(["[CLS]", "$0", "[SEP]"])
    .with_pair("[CLS]:0 $A:0 [SEP]:0 $B:1 [SEP]:1")
    .with_special_tokens([("[CLS]", 1), ("[SEP]", 0)])
)

processor.added_tokens(False)   # 2
processor.added_tokens(True)    # 3
processor.validate()            # raises TemplateError if something is missing

parse_piece("$B:2")             # SequencePiece(id=SequenceId.B, type_id=2)
```

`TemplateProcessing` is immutable; the `with_*` methods return copies. One can
also be built from the `post_processor` section of a `tokenizer.json` with
`create_template_processing(config)`.

## Truncation and padding

```python
from toktools.settings import create_padding_params, create_truncation_params

trunc = create_truncation_params(
    {"max_length": 512, "stride": 0, "strategy": "LongestFirst"}
)
pad = create_padding_params({
    "strategy": {"Fixed": 128},
    "direction": "Right",
    "pad_id": 0,
    "pad_type_id": 0,
    "pad_token": "[PAD]",
})
```

Both readers return `None` when given `None`, and raise `KeyError` when a
required value is missing.

## SentencePiece charsmaps

```python
from toktools.spm import Precompiled, from_base64

charsmap = Precompiled.from_bytes(from_base64(charsmap_base64_text))
charsmap.transform("\ufb01")          # "fi" with an NFKC charsmap
charsmap.normalize_string("text")
```

`transform` returns `""` when the charsmap has no replacement. In
`normalize_string`, a short grapheme that has a replacement of its own ends the
output with that replacement; otherwise characters are replaced one by one and
non-spacing marks are written as `U+XXXX`.

## What this package does not do

It holds settings and helpers only. There is no tokenizer pipeline, no
tokenization model, no encoding type, and no loader for a whole
`tokenizer.json`. `TemplateProcessing` does not apply its templates to token
sequences, and the truncation and padding settings are not applied to
anything by this package.

## Running the tests

```
pip install ".[test]"
pytest
```