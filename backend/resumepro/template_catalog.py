from typing import Dict, List, Optional

TEMPLATES: List[Dict] = [
    {"id": 1, "name": "Modern Classic", "category": "Professional", "popular": True, "atsScore": 98,
     "description": "Clean, minimalist design perfect for any industry"},
    {"id": 2, "name": "Executive Pro", "category": "Executive", "popular": False, "atsScore": 95,
     "description": "Two-column layout ideal for senior positions"},
    {"id": 3, "name": "Corporate Elite", "category": "Business", "popular": True, "atsScore": 97,
     "description": "Sophisticated design for corporate roles"},
    {"id": 4, "name": "Creative Edge", "category": "Creative", "popular": False, "atsScore": 92,
     "description": "Stand out design for creative professionals"},
    {"id": 5, "name": "Tech Focus", "category": "Technology", "popular": True, "atsScore": 96,
     "description": "Modern tech-inspired layout for developers"},
    {"id": 6, "name": "Finance Pro", "category": "Finance", "popular": False, "atsScore": 99,
     "description": "Traditional elegance for finance sector"},
    {"id": 7, "name": "Healthcare Plus", "category": "Healthcare", "popular": False, "atsScore": 94,
     "description": "Clean medical professional format"},
    {"id": 8, "name": "Academic Scholar", "category": "Academic", "popular": False, "atsScore": 93,
     "description": "Research-focused academic layout"},
    {"id": 9, "name": "Marketing Star", "category": "Marketing", "popular": True, "atsScore": 91,
     "description": "Creative marketing professional design"},
    {"id": 10, "name": "Global Executive", "category": "International", "popular": False, "atsScore": 96,
     "description": "International business standard"},
    {"id": 11, "name": "LaTeX Academic", "category": "Academic", "popular": True, "atsScore": 97,
     "description": "Clean LaTeX-style academic format"},
]

# Gallery filter tabs; some template categories are only reachable through "All"
CATEGORIES = ["All", "Professional", "Executive", "Creative", "Technology", "Business", "Academic"]

# PDF style variant per category, anything else renders as "classic"
STYLE_VARIANTS = {
    "Creative": "modern",
    "Technology": "modern",
    "Marketing": "modern",
    "Executive": "executive",
    "International": "executive",
    "Academic": "academic",
}

def list_templates(category: Optional[str] = None) -> List[Dict]:
    if not category or category == "All":
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t["category"] == category]

def get_template(template_id: Optional[int]) -> Optional[Dict]:
    if template_id is None:
        return None
    return next((t for t in TEMPLATES if t["id"] == template_id), None)

def style_for(template: Optional[Dict]) -> str:
    if not template:
        return "classic"
    return STYLE_VARIANTS.get(template["category"], "classic")
