from typing import Any, Dict
from fastapi import APIRouter, Depends

from campus_erp import tables
from campus_erp.core import queries
from campus_erp.database import DocumentStore, get_store
from campus_erp.errors import NotFound

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"]
)

@router.get("/{admin_id}")
def get_admin(admin_id: str, store: DocumentStore = Depends(get_store)) -> Dict[str, Any]:
    admin = queries.get_by_key(store, tables.ADMIN, tables.ADMIN.key(admin_id))
    if admin is None:
        raise NotFound("Admin not found")
    return admin
