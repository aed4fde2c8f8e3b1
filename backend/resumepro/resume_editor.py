"""Section editing for saved resumes: add, replace and remove entries."""
from collections import OrderedDict
from typing import Dict, List, Optional, Type

from pydantic import BaseModel

from .schemas import (
    ResumeData, PersonalInfo, ExperienceItem, EducationItem, SkillItem, ProjectItem,
)

SECTION_MODELS: Dict[str, Type[BaseModel]] = {
    "experience": ExperienceItem,
    "education": EducationItem,
    "skills": SkillItem,
    "projects": ProjectItem,
}

REQUIRED_FIELDS = {
    "experience": ("company", "position"),
    "education": ("institution", "degree"),
    "skills": ("name",),
    "projects": ("name", "description"),
}

PREVIEW_SKILL_CATEGORIES = ["Technical", "Tools", "Languages", "Soft Skills"]


class ResumeValidationError(ValueError):
    pass


def _check_section(section: str) -> None:
    if section not in SECTION_MODELS:
        raise KeyError(f"Unknown section '{section}'")


def validate_entry(section: str, entry: BaseModel) -> None:
    _check_section(section)
    missing = [f for f in REQUIRED_FIELDS[section] if not str(getattr(entry, f, "") or "").strip()]
    if missing:
        message = "Please enter skill name" if section == "skills" else "Please fill required fields"
        raise ResumeValidationError(message)


def add_entry(resume: ResumeData, section: str, entry: BaseModel, index: Optional[int] = None) -> ResumeData:
    """Append `entry` to `section`, or replace the entry at `index` when given.

    Returns a new ResumeData; the input is left untouched.
    """
    validate_entry(section, entry)
    updated = resume.model_copy(deep=True)
    items = getattr(updated, section)
    if index is None:
        items.append(entry)
    else:
        if not 0 <= index < len(items):
            raise IndexError(f"No {section} entry at index {index}")
        items[index] = entry
    return updated


def remove_entry(resume: ResumeData, section: str, index: int) -> ResumeData:
    _check_section(section)
    updated = resume.model_copy(deep=True)
    items = getattr(updated, section)
    if not 0 <= index < len(items):
        raise IndexError(f"No {section} entry at index {index}")
    del items[index]
    return updated


def update_personal_info(resume: ResumeData, info: PersonalInfo) -> ResumeData:
    updated = resume.model_copy(deep=True)
    updated.personalInfo = info.model_copy()
    return updated


def group_skills(skills: List[SkillItem], categories: Optional[List[str]] = None) -> "OrderedDict[str, List[str]]":
    """Skill names per category.

    With `categories`, only those categories are returned, in that order;
    otherwise every category appears in first-seen order.
    """
    groups: "OrderedDict[str, List[str]]" = OrderedDict()
    order = categories if categories is not None else []
    for category in order:
        groups[category] = []
    for skill in skills:
        if categories is not None and skill.category not in groups:
            continue
        groups.setdefault(skill.category, []).append(skill.name)
    return OrderedDict((k, v) for k, v in groups.items() if v)
