from typing import Optional
from fastapi import APIRouter, HTTPException
from ..schemas import TemplateOut, TemplateListOut
from ..template_catalog import CATEGORIES, list_templates, get_template

router = APIRouter(prefix="/api/templates", tags=["templates"])

@router.get("", response_model=TemplateListOut)
def templates(category: Optional[str] = None):
    return TemplateListOut(categories=CATEGORIES, templates=list_templates(category))

@router.get("/{template_id}", response_model=TemplateOut)
def template_detail(template_id: int):
    t = get_template(template_id)
    if not t:
        raise HTTPException(404, "template not found")
    return t
