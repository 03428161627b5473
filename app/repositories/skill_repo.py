# app/repositories/skill_repo.py
from app.models.skill_category import SkillCategory
from app.repositories.owned_record_repo import OwnedRecordRepository

class SkillCategoryRepository(OwnedRecordRepository):
    model = SkillCategory
    id_column = "skill_id"
