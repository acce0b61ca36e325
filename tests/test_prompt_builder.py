import pytest

from prompt_builder import NONE_PROVIDED, SYSTEM_INSTRUCTION, build_messages, build_prompt, user_data_block
from schema_profile import UserProfile


def test_user_data_block_lists_everything(profile):
    block = user_data_block(profile)

    assert "Name: Jane Doe" in block
    assert "Professional Title: Full-Stack Developer" in block
    assert "Skills: Python, React" in block
    assert "- Senior Engineer at Acme (01/2020 - Present)" in block
    assert "Key Achievements: Led the checkout rewrite; Cut page load time by 40%" in block
    assert "- Tracker: Habit tracking app [Python, React]" in block
    assert " - Live: https://tracker.example.com - GitHub: https://github.com/jane/tracker" in block
    assert "- BSc Computer Science from State University (09/2014 - 06/2018) | CGPA: 3.8" in block
    assert "Media Assets" not in block


def test_empty_sections_get_placeholders():
    prompt = build_prompt(UserProfile(name="Solo"))

    assert f"Work Experience:\n{NONE_PROVIDED}" in prompt
    assert f"Projects:\n{NONE_PROVIDED}" in prompt
    assert f"Education:\n{NONE_PROVIDED}" in prompt
    assert "Professional Title: Not specified" in prompt
    assert "Bio:" not in prompt
    assert "undefined" not in prompt
    assert ": None\n" not in prompt


def test_reference_site_changes_design_instruction(profile):
    plain = build_prompt(profile)
    assert "Use a clean, modern design with professional styling." in plain

    with_ref = build_prompt(profile.model_copy(update={"reference_site": "https://ref.example.com"}))
    assert "Study https://ref.example.com" in with_ref
    assert "clean, modern design" not in with_ref


def test_creative_style_uses_reference_analysis(profile):
    ref = profile.model_copy(update={"reference_site": "https://ref.example.com"})
    prompt = build_prompt(ref, "creative")

    assert "FIRST: Study and analyze this reference website: https://ref.example.com" in prompt
    assert "INSPIRED VARIATION" in prompt
    assert "Jane Doe's name and Full-Stack Developer" in prompt


def test_free_text_education_passes_through():
    p = UserProfile(name="Sam", education="BSc Physics, Oxford, 2012")
    assert "Education:\nBSc Physics, Oxford, 2012" in build_prompt(p)


def test_media_mentions_relative_asset_paths():
    p = UserProfile(name="Sam", media=[
        {"filename": "me.png", "kind": "image", "data": b"\x89PNG"},
        {"filename": "talk", "kind": "video", "url": "https://youtu.be/xyz"},
    ])
    prompt = build_prompt(p)
    assert "- Image: assets/me.png" in prompt
    assert "- Video: https://youtu.be/xyz" in prompt


def test_prompt_is_deterministic(profile):
    assert build_prompt(profile) == build_prompt(profile)
    assert build_prompt(profile, "creative") == build_prompt(profile, "creative")


def test_prompt_asks_for_complete_document(profile):
    for style in ("concise", "creative"):
        assert "<!DOCTYPE html> to </html>" in build_prompt(profile, style)


def test_unknown_style_rejected(profile):
    with pytest.raises(ValueError):
        build_prompt(profile, "verbose")


def test_messages_carry_system_instruction(profile):
    system, user = build_messages(profile)
    assert system == {"role": "system", "content": SYSTEM_INSTRUCTION}
    assert user["role"] == "user"
