import re
from collections import Counter
from typing import Dict, List

STOP = set("""
a an and or the is are was were be been to for of in on at with by from as this that these those
will would should can could may our your you we they their its it who what when where which while
using use used work working role team teams job candidate candidates experience years year
ability strong excellent preferred required requirements responsibilities plus including
""".split())

TECH_TERMS = {
    "python", "java", "c++", "c#", "typescript", "javascript", "react", "next.js", "node.js",
    "aws", "azure", "gcp", "kubernetes", "docker", "sql", "postgres", "mysql", "redis", "go",
    "fastapi", "django", "flask", "spark", "kafka", "terraform", "graphql", "rest", "linux",
}

def tokenize(txt: str) -> List[str]:
    words = re.findall(r"[A-Za-z][A-Za-z0-9\-\+\.#]{1,}", txt.lower())
    words = [w.rstrip(".") for w in words]
    return [w for w in words if w not in STOP and len(w) > 2 or w in TECH_TERMS]

def extract_keywords(jd_text: str, top_k: int = 10) -> List[str]:
    freq = Counter(tokenize(jd_text))
    # tech terms first, then by frequency; Counter keeps first-seen order for ties
    ranked = sorted(freq.items(), key=lambda kv: (kv[0] in TECH_TERMS, kv[1]), reverse=True)
    return [w for w, _ in ranked[:top_k]]

def keyword_coverage(resume_text: str, keywords: List[str]) -> Dict[str, List[str]]:
    haystack = resume_text.lower()
    present = [k for k in keywords if k.lower() in haystack]
    missing = [k for k in keywords if k.lower() not in haystack]
    return {"present": present, "missing": missing}
