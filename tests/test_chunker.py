# tests/test_chunker.py

import pytest

from docqa.infrastructure.chunker import SentenceChunker


def _long_text(n_sentences: int = 60) -> str:
    return " ".join(
        f"Sentence number {i} talks about topic {i % 7}." for i in range(n_sentences)
    )


def test_empty_document_yields_no_chunks():
    chunker = SentenceChunker()
    assert chunker.chunk("", "doc") == []
    assert chunker.chunk("   \n\t ", "doc") == []


def test_short_document_yields_single_chunk():
    chunker = SentenceChunker()
    text = "The cat sat on the mat. The mat was red."

    chunks = chunker.chunk(text, "doc-a")

    assert len(chunks) == 1
    assert chunks[0].text == text
    assert chunks[0].start == 0
    assert chunks[0].end == len(text)
    assert chunks[0].document_id == "doc-a"
    assert chunks[0].embedding is None


def test_clean_text_collapses_whitespace_and_drops_symbols():
    assert SentenceChunker.clean_text("Hello\n\n  world @ #1!") == "Hello world 1!"
    assert SentenceChunker.clean_text("(a) [b] {c}; d: e-f, g?") == "(a) [b] {c}; d: e-f, g?"


def test_sentence_spans_keep_terminators():
    cleaned = "One. Two! Three?"
    spans = SentenceChunker.sentence_spans(cleaned)

    assert spans == [(0, 4), (5, 9), (10, 16)]
    assert [cleaned[s:e] for s, e in spans] == ["One.", "Two!", "Three?"]


def test_oversized_sentence_is_emitted_whole():
    chunker = SentenceChunker(chunk_size=500)
    text = "word " * 200  # one 999-char sentence, no terminator

    chunks = chunker.chunk(text, "doc")

    assert len(chunks) == 1
    assert len(chunks[0].text) == 999


def test_chunk_text_matches_offsets_into_cleaned_text():
    chunker = SentenceChunker()
    text = _long_text()
    cleaned = SentenceChunker.clean_text(text)

    chunks = chunker.chunk(text, "doc")

    assert len(chunks) > 2
    for chunk in chunks:
        assert 0 <= chunk.start <= chunk.end <= len(cleaned)
        assert chunk.text == cleaned[chunk.start:chunk.end]


def test_chunks_cover_whole_text_without_gaps():
    chunker = SentenceChunker()
    cleaned = SentenceChunker.clean_text(_long_text())

    chunks = chunker.chunk(cleaned, "doc")

    assert chunks[0].start == 0
    assert chunks[-1].end == len(cleaned)
    for previous, current in zip(chunks, chunks[1:]):
        assert previous.start < current.start
        assert current.start <= previous.end


def test_chunk_text_keeps_terminators_and_reseeds_from_short_chunk():
    chunker = SentenceChunker(chunk_size=500, chunk_overlap=50)
    text = "... " + "word " * 120
    cleaned = chunker.clean_text(text)

    chunks = chunker.chunk(text, "doc")

    assert [(c.start, c.end) for c in chunks] == [(0, 3), (0, len(cleaned))]
    assert chunks[0].text == "..."
    assert chunks[1].text == cleaned
    assert chunks[1].text.startswith("... word")


def test_consecutive_chunks_overlap_by_at_most_overlap_size():
    chunker = SentenceChunker(chunk_size=500, chunk_overlap=50)
    chunks = chunker.chunk(_long_text(), "doc")

    for previous, current in zip(chunks, chunks[1:]):
        shared = previous.end - current.start
        assert 0 < shared <= 50
        assert current.text.startswith(previous.text[-shared:])


def test_chunk_size_bound():
    chunker = SentenceChunker(chunk_size=500)
    text = _long_text(120)
    cleaned = SentenceChunker.clean_text(text)
    longest_sentence = max(e - s for s, e in SentenceChunker.sentence_spans(cleaned))

    chunks = chunker.chunk(text, "doc")

    for chunk in chunks:
        assert 1 <= len(chunk.text) <= 500 + longest_sentence


def test_chunk_ids_are_unique():
    chunks = SentenceChunker().chunk(_long_text(), "doc")
    assert len({c.chunk_id for c in chunks}) == len(chunks)


def test_chunking_is_deterministic_apart_from_ids():
    chunker = SentenceChunker()
    first = chunker.chunk(_long_text(), "doc")
    second = chunker.chunk(_long_text(), "doc")

    assert [(c.text, c.start, c.end) for c in first] == [(c.text, c.start, c.end) for c in second]


@pytest.mark.parametrize("size, overlap", [(0, 0), (100, 100), (100, -1)])
def test_invalid_parameters_raise(size, overlap):
    with pytest.raises(ValueError):
        SentenceChunker(chunk_size=size, chunk_overlap=overlap)
