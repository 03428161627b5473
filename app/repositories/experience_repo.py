# app/repositories/experience_repo.py
from app.models.experience import Experience
from app.repositories.owned_record_repo import OwnedRecordRepository

class ExperienceRepository(OwnedRecordRepository):
    model = Experience
    id_column = "experience_id"
