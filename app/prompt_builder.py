"""
UserProfile ➜ instruction text for the website model.

• Pure functions: the same profile always yields the same prompt.
• Two boilerplate flavours: "concise" (short requirement list) and
  "creative" (reference-site analysis + innovation brief).
• Missing optional data is omitted or replaced by a default-style
  instruction; empty lists read "None provided".
"""

from __future__ import annotations

import textwrap
from typing import Dict, List

from schema_profile import UserProfile

NONE_PROVIDED = "None provided."

SYSTEM_INSTRUCTION = (
    "You are an expert web developer who creates professional portfolio websites. "
    "Always return complete, valid HTML code with embedded CSS and JavaScript."
)

_OUTPUT_RULE = "Return ONLY the complete HTML code from <!DOCTYPE html> to </html>."

_CONCISE_REQUIREMENTS = textwrap.dedent(
    """\
    REQUIREMENTS:
    - Single HTML file with embedded CSS/JS
    - Responsive design (mobile-first)
    - Professional appearance matching the requested design style
    - Sections: Header, Hero, About, Skills, Experience, Projects, Education, Contact
    - Modern CSS (Grid/Flexbox), Google Fonts, Font Awesome icons
    - Smooth animations, fast loading"""
)

_REFERENCE_CHECKLIST = textwrap.dedent(
    """\
    Carefully examine:
    - Layout structure and composition
    - Color palette and visual hierarchy
    - Typography choices and font pairings
    - Navigation style and user flow
    - Visual elements and design patterns
    - Spacing, proportions, and balance
    - Interactive elements and animations
    - Overall aesthetic and mood"""
)

_CREATIVE_BRIEF = textwrap.dedent(
    """\
    WHAT TO AVOID:
    - Generic template-like designs
    - Cookie-cutter layouts you'd find on template sites
    - Overused gradient backgrounds unless they match the reference style
    - Basic card layouts without innovation
    - Predictable sections with no creative flair

    INNOVATION REQUIREMENTS:
    - Surprise me with creative layout solutions
    - Use unexpected but tasteful design elements
    - Create memorable visual experiences
    - Show exceptional attention to detail
    - Make every section feel intentionally designed"""
)

_CREATIVE_EXECUTION = textwrap.dedent(
    """\
    DESIGN EXECUTION:
    1. HTML Structure: Single file with embedded CSS and JavaScript
    2. Responsive Design: Flawless mobile-first approach with seamless breakpoints
    3. Performance: Optimized loading, smooth animations, efficient code
    4. Accessibility: Proper semantic HTML5, ARIA labels, keyboard navigation
    5. SEO: Comprehensive meta tags, structured data, optimal HTML structure

    TECHNICAL EXCELLENCE:
    - Modern CSS (Grid, Flexbox, Custom Properties)
    - Smooth micro-interactions and purposeful animations
    - Google Fonts integration with thoughtful typography
    - Icon system (Font Awesome or SVG icons)
    - Cross-browser compatibility"""
)

STYLES = ("concise", "creative")


# ───────────────────────────────────────── sections ──
def _or_placeholder(lines: List[str]) -> str:
    return "\n".join(lines) if lines else NONE_PROVIDED


def experience_lines(profile: UserProfile) -> List[str]:
    lines = []
    for w in profile.work_history:
        when = w.date_range()
        head = f"- {w.position} at {w.company}" + (f" ({when})" if when else "")
        lines.append(f"{head}\n  Key Achievements: {'; '.join(w.bullets)}")
    return lines


def project_lines(profile: UserProfile) -> List[str]:
    lines = []
    for p in profile.projects:
        line = f"- {p.title}: {p.description} [{', '.join(p.stack)}]"
        if p.url:
            line += f" - Live: {p.url}"
        if p.github:
            line += f" - GitHub: {p.github}"
        lines.append(line)
    return lines


def education_lines(profile: UserProfile) -> List[str]:
    if isinstance(profile.education, str):
        return [profile.education] if profile.education else []
    lines = []
    for e in profile.education:
        when = e.date_range()
        line = f"- {e.degree} from {e.school}" + (f" ({when})" if when else "")
        if e.cgpa:
            line += f" | CGPA: {e.cgpa}"
        lines.append(line)
    return lines


def media_lines(profile: UserProfile) -> List[str]:
    lines = []
    for m in profile.media:
        if m.kind == "video":
            if m.url:
                lines.append(f"- Video: {m.url} (embed it)")
        else:
            lines.append(f"- Image: {m.asset_path} (reference it with this relative path)")
    return lines


def user_data_block(profile: UserProfile) -> str:
    parts = [
        f"Name: {profile.name}",
        f"Professional Title: {profile.title or 'Not specified'}",
    ]
    if profile.bio:
        parts.append(f"Bio: {profile.bio}")
    parts.append(f"Skills: {', '.join(profile.skills) if profile.skills else NONE_PROVIDED}")
    parts += [
        "",
        "Work Experience:",
        _or_placeholder(experience_lines(profile)),
        "",
        "Projects:",
        _or_placeholder(project_lines(profile)),
        "",
        "Education:",
        _or_placeholder(education_lines(profile)),
    ]
    media = media_lines(profile)
    if media:
        parts += ["", "Media Assets:", *media]
    return "\n".join(parts)


# ───────────────────────────────────────── prompts ──
def _concise(profile: UserProfile) -> str:
    if profile.reference_site:
        design = (f"Design Inspiration: Study {profile.reference_site} and create a similar "
                  "aesthetic/layout style adapted for a portfolio.")
    else:
        design = "Use a clean, modern design with professional styling."
    return "\n\n".join([
        f"Create a modern, professional portfolio website for {profile.name}.",
        design,
        "USER DATA:\n" + user_data_block(profile),
        _CONCISE_REQUIREMENTS,
        _OUTPUT_RULE,
    ])


def _creative(profile: UserProfile) -> str:
    if profile.reference_site:
        mission = "\n\n".join([
            f"FIRST: Study and analyze this reference website: {profile.reference_site}",
            _REFERENCE_CHECKLIST,
            "THEN: Create an INSPIRED VARIATION that captures the essence and quality of this "
            f"design while making it completely personalized for {profile.name}.",
            "DO NOT copy exactly, but CREATE A MODERN INTERPRETATION that feels cohesive with "
            "the reference style while being distinctly unique.",
        ])
    else:
        mission = ("Create a cutting-edge, innovative portfolio design that breaks away from "
                   "typical templates. Focus on creating something that would impress design "
                   "professionals and stand out in a competitive market.")
    title = profile.title or "professional"
    sections = textwrap.dedent(
        f"""\
        REQUIRED SECTIONS (Make Each Unique):
        - Header/Navigation: Creative, functional navigation that fits the design theme
        - Hero Section: Memorable first impression with {profile.name}'s name and {title}
        - About/Professional Summary: Compelling narrative section
        - Skills Showcase: Innovative visual representation of technical abilities
        - Experience Timeline: Creative presentation of work history
        - Projects Gallery: Engaging showcase of work with clear calls-to-action
        - Education: Elegant display of educational achievements
        - Contact/Connect: Professional contact information and social links"""
    )
    return "\n\n".join([
        "You are an expert web designer and developer. Your task is to create a stunning, "
        "COMPLETELY UNIQUE personal portfolio website that showcases true creativity and innovation.",
        "CRITICAL DESIGN MISSION:\n" + mission,
        _CREATIVE_BRIEF,
        "USER INFORMATION:\n" + user_data_block(profile),
        _CREATIVE_EXECUTION,
        sections,
        "OUTPUT REQUIREMENTS:\n" + _OUTPUT_RULE
        + "\nNo explanations, no markdown formatting, no comments outside the code.",
        f"Create something extraordinary that {profile.name} would be proud to showcase "
        "to potential employers or clients.",
    ])


_BUILDERS = {"concise": _concise, "creative": _creative}


def build_prompt(profile: UserProfile, style: str = "concise") -> str:
    """Render `profile` into the instruction text for one generation request."""
    builder = _BUILDERS.get(style)
    if builder is None:
        raise ValueError(f"Unknown prompt style: {style!r} (expected one of {STYLES})")
    return builder(profile)


def build_messages(profile: UserProfile, style: str = "concise") -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": build_prompt(profile, style)},
    ]
