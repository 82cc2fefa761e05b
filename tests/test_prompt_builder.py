from secondhalf.data.schema import MATCH_RECORD_FIELDS, MatchRecord
from secondhalf.prompts.prompt_builder import (
    INSTRUCTIONS,
    PROMPT_SECTIONS,
    GenerationParams,
    build_prompt,
    build_request_body,
    render_match_data,
)


def test_sections_cover_every_field_once_in_declaration_order():
    flattened = [
        name for _, lines in PROMPT_SECTIONS for _, fields in lines for name in fields
    ]
    assert flattened == MATCH_RECORD_FIELDS


def test_prompt_contains_every_value_exactly_once(sentinel_record):
    prompt = build_prompt(sentinel_record)
    for name in MATCH_RECORD_FIELDS:
        token = getattr(sentinel_record, name)
        assert prompt.count(token) == 1, name


def test_prompt_values_follow_section_order(sentinel_record):
    prompt = build_prompt(sentinel_record)
    positions = [prompt.index(getattr(sentinel_record, n)) for n in MATCH_RECORD_FIELDS]
    assert positions == sorted(positions)


def test_prompt_is_deterministic(sample_record):
    copy = MatchRecord(**sample_record.model_dump())
    assert build_prompt(sample_record) == build_prompt(copy)
    assert build_request_body(sample_record) == build_request_body(copy)


def test_prompt_starts_with_instructions_and_lists_bet_types(sample_record):
    prompt = build_prompt(sample_record)
    assert prompt.startswith(INSTRUCTIONS)
    for i in range(1, 8):
        assert f"\n{i}. " in prompt
    assert "Handikaplı Maç Sonucu" in prompt
    assert "düşük/orta/yüksek" in prompt


def test_paired_stats_render_home_away(sample_record):
    data = render_match_data(sample_record)
    assert "Şutlar (Ev/Dep): 7-3" in data
    assert "xG (Ev/Dep): 1.2-0.4" in data
    assert "İlk Yarı Skoru: 1-0" in data
    assert "Ev Sahibi: Galatasaray" in data


def test_numeric_values_are_rendered_as_text():
    data = render_match_data(MatchRecord(home_corners=5, away_corners=2, home_xg=1.75))
    assert "Kornerler (Ev/Dep): 5-2" in data
    assert "xG (Ev/Dep): 1.75-" in data


def test_empty_record_still_builds_all_sections():
    prompt = build_prompt(MatchRecord())
    for header, _ in PROMPT_SECTIONS:
        assert f"{header}:" in prompt
    assert "Lig: \n" in prompt
    assert "Fauller (Ev/Dep): -\n" in prompt


def test_request_body_shape(sample_record):
    body = build_request_body(sample_record)
    assert body["contents"][0]["parts"][0]["text"] == build_prompt(sample_record)
    assert body["generationConfig"] == {
        "temperature": 0.7,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 1024,
    }


def test_request_body_custom_params(sample_record):
    body = build_request_body(sample_record, GenerationParams(temperature=0.2, max_output_tokens=256))
    assert body["generationConfig"]["temperature"] == 0.2
    assert body["generationConfig"]["maxOutputTokens"] == 256
    assert body["generationConfig"]["topK"] == 40
