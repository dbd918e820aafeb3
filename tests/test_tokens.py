from karaoke_lyrics.krc.tokens import CharTuple, LineTag, Newline, Text, split_lines, tokenize


def test_tokenize_line():
    toks = list(tokenize("[1000,200]<0,100,0>a<100,100,0>b\n"))
    assert toks == [
        LineTag(1000, 200, "1000,200"),
        CharTuple(0, 100, 0, "0,100,0"),
        Text("a"),
        CharTuple(100, 100, 0, "100,100,0"),
        Text("b"),
        Newline(),
    ]


def test_adjacent_tuples_and_empty_body():
    toks = list(tokenize("[5,0]<0,1,0><1,1,0>"))
    assert [type(t) for t in toks] == [LineTag, CharTuple, CharTuple]
    assert "".join(t.render() for t in toks) == "[5,0](0,1,0)(1,1,0)"


def test_raw_digits_are_kept():
    toks = list(tokenize("[0100,020]<007,1,0>x"))
    assert "".join(t.render() for t in toks) == "[0100,020](007,1,0)x"
    assert toks[0].start_ms == 100


def test_text_only():
    assert list(tokenize("[ar:Someone]")) == [Text("[ar:Someone]")]
    assert list(tokenize("")) == []


def test_split_lines():
    lines = list(split_lines(tokenize("a\n\n[1,2]b")))
    assert lines == [[Text("a")], [], [LineTag(1, 2, "1,2"), Text("b")]]
