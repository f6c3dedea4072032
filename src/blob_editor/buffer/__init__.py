"""Line buffer, cursor and (de)serialization."""

from .buffer import Buffer, Transaction
from .chain import Character, CharacterChain
from .edit import (
    DeletionOutcome,
    LineReader,
    delete_current,
    insert_lines,
    reassign_after_delete,
)
from .lines import Line, LineBuffer, LineHandle
from .navigation import advance, retreat
from .serializer import (
    buffer_to_text,
    chain_to_text,
    load_buffer,
    store_buffer,
    text_to_chain,
)
from .state import Cursor
from .validation import BufferValidationError, ensure_handle

__all__ = [
    "Buffer",
    "Transaction",
    "Character",
    "CharacterChain",
    "Cursor",
    "DeletionOutcome",
    "Line",
    "LineBuffer",
    "LineHandle",
    "LineReader",
    "BufferValidationError",
    "advance",
    "retreat",
    "buffer_to_text",
    "chain_to_text",
    "load_buffer",
    "store_buffer",
    "text_to_chain",
    "delete_current",
    "insert_lines",
    "reassign_after_delete",
    "ensure_handle",
]
