"""
CascadeBlog Backend - Document Serialization
=============================================

What:  Converts raw MongoDB documents and write results into JSON-ready data.
Why:   BSON types (ObjectId, datetime) are not JSON serializable, and blog
       documents have no fixed schema to hand to a Pydantic model.
How:   Recursive walk: ObjectId → str, datetime → ISO 8601, containers mapped.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo.results import InsertOneResult, UpdateResult

from app.schemas.blog import InsertReceipt, UpdateReceipt


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Serialize one document; None passes through (absent document)."""
    if document is None:
        return None
    return serialize_value(document)


def serialize_documents(documents: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_value(doc) for doc in documents]


def insert_receipt(result: InsertOneResult) -> InsertReceipt:
    return InsertReceipt(
        acknowledged=result.acknowledged,
        inserted_id=str(result.inserted_id),
    )


def update_receipt(result: UpdateResult) -> UpdateReceipt:
    upserted = result.upserted_id
    return UpdateReceipt(
        acknowledged=result.acknowledged,
        matched_count=result.matched_count,
        modified_count=result.modified_count,
        upserted_id=str(upserted) if upserted is not None else None,
    )
