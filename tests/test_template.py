import pytest

from toktools.template import (
    SequenceId,
    SequencePiece,
    SpecialToken,
    SpecialTokenPiece,
    TemplateError,
    TemplateProcessing,
    Tokens,
    count_added,
    create_template_processing,
    parse_piece,
    parse_template,
)


def bert_template():
    return (
        TemplateProcessing.default()
        .with_single(["[CLS]", "$0", "[SEP]"])
        .with_pair("[CLS]:0 $A:0 [SEP]:0 $B:1 [SEP]:1")
        .with_special_tokens([("[CLS]", 1), ("[SEP]", 0)])
    )


LLAMA_CONFIG = {
    "type": "TemplateProcessing",
    "single": [
        {"SpecialToken": {"id": "<s>", "type_id": 0}},
        {"Sequence": {"id": "A", "type_id": 0}},
    ],
    "pair": [
        {"SpecialToken": {"id": "<s>", "type_id": 0}},
        {"Sequence": {"id": "A", "type_id": 0}},
        {"Sequence": {"id": "B", "type_id": 0}},
    ],
    "special_tokens": {
        "<s>": {"id": "<s>", "ids": [1.0], "tokens": ["<s>"]},
    },
}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("$", SequencePiece(SequenceId.A, 0)),
        ("$B", SequencePiece(SequenceId.B, 0)),
        ("$1", SequencePiece(SequenceId.A, 1)),
        ("$B:2", SequencePiece(SequenceId.B, 2)),
        ("$:1", SequencePiece(SequenceId.A, 1)),
        ("$a", SequencePiece(SequenceId.A, 0)),
        ("[CLS]:1", SpecialTokenPiece("[CLS]", 1)),
        ("[SEP]", SpecialTokenPiece("[SEP]", 0)),
    ],
)
def test_parse_piece(text, expected):
    assert parse_piece(text) == expected


@pytest.mark.parametrize("text", ["$C", "a:b:c", "$A:x", "$C:1"])
def test_parse_piece_errors(text):
    with pytest.raises(TemplateError):
        parse_piece(text)


def test_parse_template_string_and_list_agree():
    assert parse_template("[CLS] $A [SEP]") == parse_template(["[CLS]", "$A", "[SEP]"])
    assert parse_template("[CLS] $A") == [
        SpecialTokenPiece("[CLS]", 0),
        SequencePiece(SequenceId.A, 0),
    ]


def test_parse_template_rejects_other_types():
    with pytest.raises(TemplateError):
        parse_template(42)


def test_bert_template_added_tokens():
    processor = bert_template()
    assert processor.added_tokens(False) == 2
    assert processor.added_tokens(True) == 3


def test_default_template():
    processor = TemplateProcessing.default()
    assert processor.single == [SequencePiece(SequenceId.A, 0)]
    assert processor.pair == [SequencePiece(SequenceId.A, 1)]
    assert processor.added_tokens(False) == 0
    assert processor.added_tokens(True) == 0


def test_builder_returns_new_instance():
    base = TemplateProcessing.default()
    changed = base.with_single("[CLS] $A")
    assert base.single == [SequencePiece(SequenceId.A, 0)]
    assert changed.single[0] == SpecialTokenPiece("[CLS]", 0)


def test_tokens_lookup():
    tokens = Tokens.from_pairs([("[CLS]", 1), ("[SEP]", 0)])
    assert tokens.get("[SEP]") == SpecialToken("[SEP]", [0], ["[SEP]"])
    assert tokens.get("[MASK]") is None
    assert tokens.get_by_order(0).id == "[CLS]"
    assert len(tokens) == 2
    with pytest.raises(IndexError):
        tokens.get_by_order(2)


def test_special_token_from_token():
    assert SpecialToken.from_token("<s>", 5) == SpecialToken("<s>", [5], ["<s>"])


def test_count_added_multi_id_tokens():
    tokens = Tokens.from_special_tokens([SpecialToken("X", [1, 2, 3], ["a", "b", "c"])])
    template = parse_template("X $A X:1 Y")
    assert count_added(template, tokens) == 6
    assert count_added(template, None) == 0


def test_create_template_processing_llama():
    processor = create_template_processing(LLAMA_CONFIG)
    assert processor.added_tokens(True) == 2
    assert processor.added_tokens(False) == 1
    assert processor.pair[2] == SequencePiece(SequenceId.B, 0)
    assert processor.special_tokens.get("<s>").ids == [1]


def test_create_template_processing_without_special_tokens():
    config = {"single": [{"Sequence": {"id": "A", "type_id": 0}}], "special_tokens": None}
    processor = create_template_processing(config)
    assert processor.single == [SequencePiece(SequenceId.A, 0)]
    assert processor.pair == []
    assert processor.added_tokens(False) == 0


def test_validate_pair_must_use_both_sequences():
    processor = bert_template().with_pair("[CLS] $A [SEP]")
    with pytest.raises(TemplateError, match="must use both sequences"):
        processor.validate()


def test_validate_missing_special_token():
    processor = bert_template().with_single("[CLS] $A [MASK]")
    with pytest.raises(TemplateError, match="Missing SpecialToken"):
        processor.validate()