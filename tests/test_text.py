from karaoke_lyrics.text import decode_name


def test_decode_name():
    assert decode_name("Tom &amp; Jerry") == "Tom & Jerry"
    assert decode_name("&lt;b&gt; &quot;hi&quot; it&#39;s") == "<b> \"hi\" it's"


def test_decode_name_is_sequential():
    assert decode_name("&amp;lt;") == "<"


def test_decode_name_empty():
    assert decode_name(None) == ""
    assert decode_name("") == ""
