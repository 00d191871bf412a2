"""Sequential document numbers (CH0001, INV0037, ...).

The counter row is incremented inside the caller's transaction, so a number
consumed by a document that is rolled back is handed out again.
"""
import threading

from sqlalchemy.orm import Session

from wiremill.core.config import settings
from wiremill.models.sequence import DocumentSequence

_counter_lock = threading.Lock()


def next_number(db: Session, prefix: str, width: int = None) -> str:
    width = width or settings.DOCUMENT_NUMBER_WIDTH
    with _counter_lock:
        sequence = (
            db.query(DocumentSequence)
            .filter(DocumentSequence.prefix == prefix)
            .with_for_update()
            .first()
        )
        if not sequence:
            sequence = DocumentSequence(prefix=prefix, last_value=0)
            db.add(sequence)
        sequence.last_value += 1
        db.flush()
        return f"{prefix}{sequence.last_value:0{width}d}"
