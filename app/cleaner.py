"""
Shared clean-ups for raw wizard input.

Accepts both the wizard's own snake_case keys and the camelCase keys of
exported form data (``workHistory``, ``startMonth``, ``referenceSite`` …),
and returns a dict ready for ``UserProfile(**data)``.
"""
from __future__ import annotations
import re, unicodedata
from typing import Any, Dict, List

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.I)
_BULLET = re.compile(r"^\s*(?:[•\-–*]|\d+[.)])\s*")

_ALIASES = {
    "workHistory": "work_history",
    "referenceSite": "reference_site",
    "startMonth": "start_month",
    "startYear": "start_year",
    "endMonth": "end_month",
    "endYear": "end_year",
    "isPresent": "is_present",
    "mimeType": "mime_type",
    "type": "kind",
}

# ───────────────────────────────────────── helpers ──
def smart_split(text: str) -> List[str]:
    """'Python, Go ;Rust' → ['Python', 'Go', 'Rust'] (commas, semicolons, new lines)."""
    parts = re.split(r"[,;\n]+", unicodedata.normalize("NFKC", text or ""))
    return [p.strip() for p in parts if p.strip()]

def split_bullets(raw: str | List[str]) -> List[str]:
    """One bullet per line, leading markers ('-', '•', '1.') removed."""
    if isinstance(raw, str):
        raw = raw.splitlines()
    return [_BULLET.sub("", x).strip() for x in raw if x and _BULLET.sub("", x).strip()]

def expand_username_url(token: str, domain: str) -> str:
    token = (token or "").strip()
    if not token or token.startswith("http"):
        return token
    if "/" in token.rstrip("/") and "." in token.split("/")[0]:
        return ensure_scheme(token)        # github.com/jane
    return f"https://{domain}/{token.lstrip('@').split('/')[-1]}"

def ensure_scheme(url: str) -> str:
    url = (url or "").strip()
    if not url or _SCHEME.match(url):
        return url
    return "https://" + url.lstrip("/")

def _dealias(d: Dict[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(k, k): v for k, v in d.items()}

def _strings(d: Dict[str, Any], *keys: str) -> None:
    for k in keys:
        if isinstance(d.get(k), str):
            d[k] = " ".join(d[k].split())

# ───────────────────────────────────────── cleaner ──
def clean_form_data(raw: Dict[str, Any]) -> Dict[str, Any]:
    r = _dealias(dict(raw))
    _strings(r, "name", "title")
    if isinstance(r.get("bio"), str):
        r["bio"] = r["bio"].strip()

    # experience
    jobs = []
    for j in r.get("work_history") or []:
        j = _dealias(dict(j))
        _strings(j, "position", "company", "duration")
        j["bullets"] = split_bullets(j.get("bullets") or [])
        if j.get("position") or j.get("company"):
            jobs.append(j)
    r["work_history"] = jobs

    # projects
    projects = []
    for p in r.get("projects") or []:
        p = dict(p)
        _strings(p, "title")
        p["description"] = (p.get("description") or "").strip()
        stack = p.get("stack") or []
        p["stack"] = smart_split(stack) if isinstance(stack, str) else smart_split(", ".join(stack))
        p["url"] = ensure_scheme(p.get("url") or "")
        p["github"] = expand_username_url(p.get("github") or "", "github.com")
        if p.get("title"):
            projects.append(p)
    r["projects"] = projects

    # skills – one list, however it was typed
    skills = r.get("skills") or []
    r["skills"] = smart_split(skills) if isinstance(skills, str) else smart_split("\n".join(skills))

    # education – free text stays free text
    edu = r.get("education")
    if isinstance(edu, str):
        r["education"] = edu.strip()
    else:
        entries = []
        for e in edu or []:
            e = _dealias(dict(e))
            _strings(e, "school", "degree", "cgpa")
            if e.get("school") or e.get("degree"):
                entries.append(e)
        r["education"] = entries

    r["media"] = [_dealias(dict(m)) if isinstance(m, dict) else m for m in r.get("media") or []]
    r["reference_site"] = ensure_scheme(r.get("reference_site") or "")
    return r
