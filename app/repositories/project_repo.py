# app/repositories/project_repo.py
from app.models.project import Project
from app.repositories.owned_record_repo import OwnedRecordRepository

class ProjectRepository(OwnedRecordRepository):
    model = Project
    id_column = "project_id"
