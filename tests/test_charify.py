from karaoke_lyrics.lrc.charify import normalize_to_char_timed
from karaoke_lyrics.lrc.normalize import normalize_to_enhanced


def test_words_split_per_character():
    text = "[00:01.000]<00:01.000>ab<00:02.000>c\n[00:03.000]<00:03.000>d"
    out = normalize_to_char_timed(text)
    assert out.split("\n") == [
        "[1000,2000](0,500,0)a(500,500,0)b(1000,1000,0)c",
        "[3000,1000](0,1000,0)d",
    ]


def test_untagged_lead_starts_with_line():
    out = normalize_to_char_timed("[00:01.000]He<00:01.500>llo")
    assert out == "[1000,1500](0,250,0)H(250,250,0)e(500,333,0)l(833,333,0)l(1166,334,0)o"


def test_offset_applies_to_following_lines():
    out = normalize_to_char_timed("[offset:500]\n[00:01.000]<00:01.000>a")
    assert out == "[offset:500]\n[1500,1000](0,1000,0)a"


def test_next_line_skips_blank_lines():
    out = normalize_to_char_timed("[00:01.000]<00:01.000>a\n\n[00:04.000]<00:04.000>b")
    assert out.split("\n")[0] == "[1000,3000](0,3000,0)a"


def test_passthrough():
    text = "[1000,500](0,500,0)a\n[00:01.000]plain\n[ar:Someone]\n\nfree"
    assert normalize_to_char_timed(text) == text


def test_roundtrip_through_enhanced():
    out = normalize_to_char_timed("[00:01.000]<00:01.000>a<00:01.400>b\n[00:02.000]<00:02.000>c")
    assert normalize_to_enhanced(out) == "[00:01.000]a<00:01.400>b\n[00:02.000]c"
