from linter.issue_key import AI_ISSUE_PREFIX, get_issue_key, normalize_message, rolling_hash


def test_rule_id_is_the_key_regardless_of_message():
    assert get_issue_key("anything at all", "th_hook_timing") == "th_hook_timing"
    assert get_issue_key("", "th_hook_timing") == "th_hook_timing"
    assert get_issue_key("Different text", "th_hook_timing") == get_issue_key("other", "th_hook_timing")


def test_free_form_keys_ignore_case_and_surrounding_whitespace():
    key = get_issue_key("Captions are too small")
    assert key.startswith(AI_ISSUE_PREFIX)
    assert get_issue_key("  captions ARE too small\n") == key
    assert get_issue_key("Captions are too big") != key


def test_known_key_values_match_existing_clients():
    assert get_issue_key("  A ") == "ai_2p"
    assert get_issue_key("ab") == "ai_2e9"
    assert get_issue_key("") == "ai_0"


def test_empty_rule_id_falls_back_to_message_hash():
    assert get_issue_key("ab", "") == "ai_2e9"
    assert get_issue_key("ab", None) == "ai_2e9"


def test_rolling_hash_wraps_to_signed_32_bits():
    value = rolling_hash("a" * 64)
    assert -(2 ** 31) <= value < 2 ** 31

    key = get_issue_key("a" * 64)
    assert key.startswith(AI_ISSUE_PREFIX)
    assert "-" not in key
    assert key == "ai_vv7y80"


def test_astral_characters_hash_as_surrogate_pairs():
    # U+1F600 is 0xD83D 0xDE00 in UTF-16
    expected = (0xD83D * 31 + 0xDE00)
    assert rolling_hash("\U0001F600") == expected


def test_normalize_message_handles_none():
    assert normalize_message(None) == ""
    assert normalize_message("  Hello ") == "hello"
