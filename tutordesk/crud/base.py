from datetime import datetime, timezone
from typing import TypeVar, Generic, Type, Any, Optional, List, Dict, Iterable
from sqlalchemy import select
from sqlalchemy.orm import Session
from pydantic import BaseModel
from tutordesk.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchema]):
    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any, *, include_deleted: bool = False) -> Optional[ModelType]:
        obj = db.get(self.model, id)
        if obj is not None and not include_deleted and getattr(obj, "deleted_at", None) is not None:
            return None
        return obj

    def get_many(self, db: Session, ids: Iterable[Any]) -> List[ModelType]:
        ids = list(ids)
        if not ids: return []
        return list(db.scalars(select(self.model).where(self.model.id.in_(ids))).all())

    def create(self, db: Session, obj_in: CreateSchema | Dict[str, Any], extra: Dict[str, Any] | None=None,
               *, commit: bool = True) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        if extra: data = {**data, **extra}
        obj = self.model(**data)
        db.add(obj)
        if commit:
            db.commit(); db.refresh(obj)
        else:
            db.flush()
        return obj

    def create_many(self, db: Session, rows: Iterable[Dict[str, Any]], *, commit: bool = True) -> List[ModelType]:
        objs = [self.model(**row) for row in rows]
        db.add_all(objs)
        if commit:
            db.commit()
            for o in objs: db.refresh(o)
        else:
            db.flush()
        return objs

    def soft_delete(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        obj.deleted_at = datetime.now(timezone.utc)
        db.add(obj); db.commit(); db.refresh(obj)
        return obj
