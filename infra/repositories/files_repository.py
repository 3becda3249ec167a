from infra.db.session import SessionLocal
from infra.db.models import FileRecord
from infra.repositories.base import new_id

class FilesRepository:
    def save(self, owner_id: str, ftype: str, path: str, name: str) -> str:
        fid = new_id("file")
        with SessionLocal() as s:
            s.add(FileRecord(id=fid, owner_id=owner_id, type=ftype, path=path, name=name))
            s.commit()
        return fid
