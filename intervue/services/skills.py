from flask import current_app

from ..errors import ValidationError
from ..extensions import db
from ..models.skill import Skill
from ..utils.store import commit, fetch, remote_call


def _check_unique(name, exclude_id=None):
    query = Skill.query.filter(db.func.lower(Skill.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Skill.id != exclude_id)
    with remote_call("check skill name"):
        if query.first():
            raise ValidationError(f'Skill "{name}" already exists', field="name")


def list_skills(search=None, category=None):
    query = Skill.query
    if search:
        query = query.filter(Skill.name.ilike(f"%{search}%"))
    if category:
        query = query.filter(Skill.category == category)
    with remote_call("list skills"):
        return query.order_by(Skill.name.asc()).all()


def categories():
    with remote_call("list skill categories"):
        return [row[0] for row in db.session.query(Skill.category).distinct().order_by(Skill.category).all()]


def get_skill(skill_id):
    return fetch(Skill, skill_id, "skill")


def add_skill(name, category="General"):
    name = (name or "").strip()
    if not name:
        raise ValidationError("Skill name is required", field="name")
    _check_unique(name)
    skill = Skill(name=name, category=(category or "General").strip() or "General")
    with remote_call("add skill"):
        db.session.add(skill)
        db.session.commit()
    current_app.logger.info("skill %s added", skill.name)
    return skill


def update_skill(skill_id, name=None, category=None):
    skill = get_skill(skill_id)
    if name is not None:
        name = name.strip()
        if not name:
            raise ValidationError("Skill name is required", field="name")
        _check_unique(name, exclude_id=skill.id)
        skill.name = name
    if category:
        skill.category = category.strip()
    commit(f"update skill {skill.id}")
    return skill


def delete_skill(skill_id):
    skill = get_skill(skill_id)
    with remote_call(f"delete skill {skill.id}"):
        db.session.delete(skill)
        db.session.commit()
    return True
