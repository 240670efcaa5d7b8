"""Document chunker - fixed-size, lossless text splitting."""

from uuid import UUID, uuid4

from backend.portal.models.docs import ContentChunk


def chunk_document(
    document_id: UUID,
    text: str,
    *,
    max_chars: int = 500,
) -> list[ContentChunk]:
    """Chunk document text into ordered, fixed-size slices.

    Pure function apart from chunk id generation. Splits text into
    consecutive, non-overlapping slices of at most max_chars characters.

    Args:
        document_id: Owning document ID, stamped on every chunk
        text: Normalized extracted text (may be empty)
        max_chars: Maximum characters per chunk (default 500)

    Returns:
        List of ContentChunk where:
        - order runs 0..n-1 in slice order
        - every slice except possibly the last has exactly max_chars characters
        - concatenating contents in order reproduces text exactly
        - empty text yields a single chunk with empty content

    Raises:
        ValueError: If max_chars is not positive
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be positive, got {max_chars}")

    # Downstream citations assume every document has at least one chunk
    if not text:
        return [ContentChunk(id=uuid4(), document_id=document_id, content="", order=0)]

    return [
        ContentChunk(
            id=uuid4(),
            document_id=document_id,
            content=text[start : start + max_chars],
            order=order,
        )
        for order, start in enumerate(range(0, len(text), max_chars))
    ]
