import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="PortfoliAI")

import uuid
from datetime import datetime

import streamlit.components.v1 as components

from bundler import archive_name, build_zip
from cleaner import clean_form_data, smart_split, split_bullets
from config import DEFAULT_MODEL, SUPPORTED_PROVIDERS, load_settings
from errors import GenerationInProgress
from form_schema import MONTHS, STEPS, TOTAL_STEPS, validate_step, year_options
from generator_llm import WebsiteGenerator
from highlighter import code_block, code_views
from schema_profile import UserProfile
from utils import get_logger

logger = get_logger("gui")

# Available models for each provider
MODEL_OPTIONS = {
    "openai": ["gpt-4o", "gpt-4o-mini", "gpt-4.1", "gpt-4.1-mini"],
    "gemini": ["gemini-2.5-flash", "gemini-2.5-pro", "gemini-2.0-flash"],
    "ollama": ["deepseek-coder-v2", "qwen2.5-coder:14b", "llama3.1:8b", "codellama:13b"],
}
PROVIDER_LABELS = {"openai": "OpenAI", "gemini": "Gemini", "ollama": "Ollama (local)"}

VIEWPORTS = {
    "🖥️ Desktop": (1200, 800),
    "📱 Tablet": (768, 1024),
    "📱 Mobile": (375, 667),
}

MONTH_CODES = [""] + [code for code, _ in MONTHS]
MONTH_LABELS = dict(MONTHS, **{"": "Month"})


def _blank_job():
    return {"_id": uuid.uuid4().hex, "position": "", "company": "", "start_month": "",
            "start_year": "", "end_month": "", "end_year": "", "is_present": False, "bullets": []}


def _blank_project():
    return {"_id": uuid.uuid4().hex, "title": "", "description": "", "stack": [], "url": "", "github": ""}


def _blank_education():
    return {"_id": uuid.uuid4().hex, "school": "", "degree": "", "cgpa": "", "start_month": "",
            "start_year": "", "end_month": "", "end_year": "", "is_present": False}


def _initial_form():
    return {
        "name": "", "title": "", "bio": "",
        "work_history": [_blank_job()],
        "projects": [_blank_project()],
        "skills": [],
        "education": [_blank_education()],
        "media": [],
        "reference_site": "",
    }


# Initialize session state variables
if "form" not in st.session_state:
    st.session_state.form = _initial_form()
if "step" not in st.session_state:
    st.session_state.step = 1
if "page" not in st.session_state:
    st.session_state.page = "form"
if "education_mode" not in st.session_state:
    st.session_state.education_mode = "Entries"
if "profile" not in st.session_state:
    st.session_state.profile = None
if "result" not in st.session_state:
    st.session_state.result = None
if "process_log_entries" not in st.session_state:
    st.session_state.process_log_entries = []
if "selected_provider" not in st.session_state:
    st.session_state.selected_provider = load_settings().provider
if "selected_model" not in st.session_state:
    st.session_state.selected_model = DEFAULT_MODEL.get(st.session_state.selected_provider, "gpt-4o")
if "generator" not in st.session_state:
    st.session_state.generator = None
if "step_errors" not in st.session_state:
    st.session_state.step_errors = []

st.markdown("""
<style>
div.stButton > button, div.stDownloadButton > button {
    border-radius: 8px !important;
    font-weight: 500 !important;
    width: 100% !important;
}
div.stButton > button[kind="primary"] {
    background: linear-gradient(90deg, #667eea 0%, #764ba2 100%) !important;
    border: none !important;
}
div.stDownloadButton > button {
    background: linear-gradient(90deg, #10ac84 0%, #1dd1a1 100%) !important;
    color: white !important;
    border: none !important;
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# --- Generator per session and provider/model choice ---
def get_generator() -> WebsiteGenerator:
    gen = st.session_state.generator
    provider = st.session_state.selected_provider
    model = st.session_state.selected_model
    if gen is None or gen.settings.provider != provider or gen.settings.model != model:
        gen = WebsiteGenerator.from_settings(load_settings(provider=provider, model=model))
        st.session_state.generator = gen
    return gen


with st.sidebar:
    st.markdown("### 🤖 AI Model Configuration")
    provider = st.selectbox(
        "Provider",
        options=list(SUPPORTED_PROVIDERS),
        index=list(SUPPORTED_PROVIDERS).index(st.session_state.selected_provider)
        if st.session_state.selected_provider in SUPPORTED_PROVIDERS else 0,
        format_func=PROVIDER_LABELS.get,
        key="provider_select",
    )
    if provider != st.session_state.selected_provider:
        st.session_state.selected_provider = provider
        # Reset to the configured default of the new provider
        st.session_state.selected_model = DEFAULT_MODEL[provider]
    options = MODEL_OPTIONS[provider]
    if st.session_state.selected_model not in options:
        options = [st.session_state.selected_model] + options
    st.session_state.selected_model = st.selectbox(
        "Model", options=options, index=options.index(st.session_state.selected_model), key="model_select"
    )
    gen = get_generator()
    if gen.config_error:
        st.warning(f"⚠️ {gen.config_error.message}")
    else:
        st.success(f"✅ {PROVIDER_LABELS[provider]} ready")

    st.divider()
    if st.button("🔁 Start over", disabled=gen.busy):
        # widget keys go too, otherwise inputs keep their old values
        keep = {"selected_provider", "selected_model", "generator", "provider_select", "model_select"}
        for key in [k for k in st.session_state.keys() if k not in keep]:
            del st.session_state[key]
        st.rerun()


# --- Field helpers ---
def _month_year(label: str, key: str, month: str, year: str, disabled: bool = False):
    years = [""] + year_options()
    c1, c2 = st.columns(2)
    with c1:
        m = st.selectbox(f"{label} month", MONTH_CODES, index=MONTH_CODES.index(month) if month in MONTH_CODES else 0,
                         format_func=MONTH_LABELS.get, key=f"{key}_month", disabled=disabled)
    with c2:
        y = st.selectbox(f"{label} year", years, index=years.index(year) if year in years else 0,
                         key=f"{key}_year", disabled=disabled)
    return m, y


def _dated_fields(entry: dict, key: str) -> None:
    entry["start_month"], entry["start_year"] = _month_year("Start", f"{key}_start",
                                                            entry["start_month"], entry["start_year"])
    entry["is_present"] = st.checkbox("I currently work/study here", value=entry["is_present"],
                                      key=f"{key}_present")
    end_m, end_y = _month_year("End", f"{key}_end", entry["end_month"], entry["end_year"],
                               disabled=entry["is_present"])
    entry["end_month"], entry["end_year"] = ("", "") if entry["is_present"] else (end_m, end_y)


def _entry_list(items: list, key: str, noun: str, render, factory) -> None:
    for i, entry in enumerate(list(items)):
        with st.container(border=True):
            head, remove = st.columns([5, 1])
            head.markdown(f"**{noun} #{i + 1}**")
            if len(items) > 1 and remove.button("🗑️ Remove", key=f"{key}_{entry['_id']}_remove"):
                items.remove(entry)
                st.rerun()
            render(entry, f"{key}_{entry['_id']}")
    if st.button(f"➕ Add {noun}", key=f"{key}_add"):
        items.append(factory())
        st.rerun()


# --- Steps ---
def step_basic_info(form: dict) -> None:
    form["name"] = st.text_input("Full name *", value=form["name"], key="name")
    form["title"] = st.text_input("Professional title *", value=form["title"],
                                  placeholder="e.g. Full-Stack Developer", key="title")
    form["bio"] = st.text_area("Short bio *", value=form["bio"], max_chars=500, key="bio",
                               help="10–500 characters")


def step_work_history(form: dict) -> None:
    def render(job, key):
        c1, c2 = st.columns(2)
        job["position"] = c1.text_input("Position *", value=job["position"], key=f"{key}_position")
        job["company"] = c2.text_input("Company *", value=job["company"], key=f"{key}_company")
        _dated_fields(job, key)
        raw = st.text_area("Key achievements * (one per line)", value="\n".join(job["bullets"]),
                           key=f"{key}_bullets")
        job["bullets"] = split_bullets(raw)

    _entry_list(form["work_history"], "job", "Experience", render, _blank_job)


def step_projects(form: dict) -> None:
    def render(project, key):
        project["title"] = st.text_input("Project title *", value=project["title"], key=f"{key}_title")
        project["description"] = st.text_area("Description *", value=project["description"],
                                              key=f"{key}_description")
        stack = st.text_input("Tech stack * (comma separated)", value=", ".join(project["stack"]),
                              key=f"{key}_stack")
        project["stack"] = smart_split(stack)
        c1, c2 = st.columns(2)
        project["url"] = c1.text_input("Live URL", value=project["url"], key=f"{key}_url")
        project["github"] = c2.text_input("GitHub URL", value=project["github"], key=f"{key}_github")

    _entry_list(form["projects"], "project", "Project", render, _blank_project)


def step_skills_education(form: dict) -> None:
    skills = st.text_area("Skills * (comma separated)", value=", ".join(form["skills"]), key="skills")
    form["skills"] = smart_split(skills)
    if form["skills"]:
        st.markdown(" ".join(f"`{s}`" for s in form["skills"]))

    st.markdown("#### 🎓 Education")
    mode = st.radio("Enter education as", ["Entries", "Free text"], horizontal=True,
                    index=["Entries", "Free text"].index(st.session_state.education_mode))
    st.session_state.education_mode = mode
    if mode == "Free text":
        text = form["education"] if isinstance(form["education"], str) else ""
        form["education"] = st.text_area("Education *", value=text, key="education_text")
        return
    if isinstance(form["education"], str):
        form["education"] = [_blank_education()]

    def render(edu, key):
        c1, c2, c3 = st.columns([2, 2, 1])
        edu["school"] = c1.text_input("School/University *", value=edu["school"], key=f"{key}_school")
        edu["degree"] = c2.text_input("Course/Degree *", value=edu["degree"], key=f"{key}_degree")
        edu["cgpa"] = c3.text_input("Grade / CGPA", value=edu["cgpa"], key=f"{key}_cgpa")
        _dated_fields(edu, key)

    _entry_list(form["education"], "edu", "Education", render, _blank_education)


def step_media(form: dict) -> None:
    uploads = st.file_uploader("Photos (PNG, JPG, GIF up to 10MB each)", type=["png", "jpg", "jpeg", "gif", "webp"],
                               accept_multiple_files=True, key="media_upload")
    videos = [m for m in form["media"] if m["kind"] == "video"]
    images = [{"filename": f.name, "kind": "image", "mime_type": f.type or "", "data": f.getvalue()}
              for f in uploads or []]
    c1, c2 = st.columns([4, 1])
    video_url = c1.text_input("Video URL (YouTube, Vimeo…)", key="video_url")
    if c2.button("➕ Add video") and video_url.strip():
        videos.append({"filename": f"video-{len(videos) + 1}", "kind": "video", "url": video_url.strip()})
    form["media"] = images + videos
    for m in form["media"]:
        if m["kind"] == "image":
            st.image(m["data"], caption=m["filename"], width=160)
        else:
            st.markdown(f"🎬 {m['url']}")


def step_reference_site(form: dict) -> None:
    form["reference_site"] = st.text_input(
        "Reference website (optional)", value=form["reference_site"], key="reference_site",
        placeholder="https://a-portfolio-you-like.com",
        help="The AI studies its layout, palette and typography and creates a personalised variation.",
    )


STEP_RENDERERS = {
    1: step_basic_info,
    2: step_work_history,
    3: step_projects,
    4: step_skills_education,
    5: step_media,
    6: step_reference_site,
}


# --- Generation Logic ---
def trigger_website_generation(profile: UserProfile) -> None:
    generator = get_generator()
    with st.status("🤖 Creating your portfolio with AI...", expanded=True) as status_ui:

        def status_update_callback(message: str):
            entry = f"{datetime.now().strftime('%H:%M:%S')} - {message}"
            st.session_state.process_log_entries.append(entry)
            if message.startswith("❌"):
                status_ui.error(message)
            else:
                status_ui.write(entry)

        try:
            result = generator.generate(profile, status_callback=status_update_callback)
        except GenerationInProgress:
            status_ui.update(label="⏳ A generation is already running, please wait.", state="running")
            return
        st.session_state.result = result
        if result.ok:
            status_ui.update(label="✅ Portfolio generated!", state="complete", expanded=False)
        else:
            status_ui.update(label="⚠️ Generation failed, showing diagnostic page.", state="error")


def _cleaned_form() -> dict:
    return clean_form_data({k: v for k, v in st.session_state.form.items()})


def submit_form() -> None:
    data = _cleaned_form()
    errors = [e for step in STEP_RENDERERS for e in validate_step(step, data)]
    if errors:
        st.session_state.step_errors = errors
        return
    st.session_state.profile = UserProfile(**data)
    st.session_state.result = None
    st.session_state.process_log_entries = []
    st.session_state.page = "preview"


# --- Pages ---
def render_form() -> None:
    st.title("✨ PortfoliAI")
    st.markdown("Turn your résumé into a personal portfolio website in six steps.")
    step = st.session_state.step
    st.progress(step / TOTAL_STEPS, text=f"Step {step} of {TOTAL_STEPS}")
    info = STEPS[step - 1]
    st.subheader(info["title"])
    st.caption(info["description"])

    form = st.session_state.form
    STEP_RENDERERS[step](form)

    for err in st.session_state.step_errors:
        st.error(err)

    st.divider()
    col_prev, _, col_next = st.columns([1, 3, 1])
    with col_prev:
        if st.button("← Previous", disabled=step == 1):
            st.session_state.step_errors = []
            st.session_state.step -= 1
            st.rerun()
    with col_next:
        if step < TOTAL_STEPS:
            if st.button("Next →", type="primary"):
                st.session_state.step_errors = validate_step(step, _cleaned_form())
                if not st.session_state.step_errors:
                    st.session_state.step += 1
                st.rerun()
        elif st.button("🚀 Generate Website", type="primary", disabled=get_generator().busy):
            submit_form()
            st.rerun()


def render_preview() -> None:
    profile: UserProfile = st.session_state.profile
    if profile is None:
        st.session_state.page = "form"
        st.rerun()

    if st.session_state.result is None:
        trigger_website_generation(profile)
        if st.session_state.result is None:
            return

    result = st.session_state.result
    artifact = result.artifact
    generator = get_generator()

    st.title("Your Portfolio is Ready! 🎉")
    st.markdown("Review your generated website, regenerate it, or download it to deploy anywhere.")

    col_back, col_regen, col_dl = st.columns(3)
    with col_back:
        if st.button("← Back to form"):
            st.session_state.page = "form"
            st.rerun()
    with col_regen:
        if st.button("🔄 Regenerate", disabled=generator.busy,
                     help="Ask the model again with the same data"):
            st.session_state.result = None
            st.rerun()
    with col_dl:
        st.download_button(
            label="📥 Download ZIP",
            data=build_zip(artifact, profile.media),
            file_name=archive_name(profile.name),
            mime="application/zip",
            use_container_width=True,
        )

    tab_preview, tab_code = st.tabs(["👁️ Live Preview", "💻 View Code"])
    with tab_preview:
        viewport = st.radio("Viewport", list(VIEWPORTS), horizontal=True, key="viewport")
        width, height = VIEWPORTS[viewport]
        components.html(artifact.preview, width=width, height=height, scrolling=True)
    with tab_code:
        files = code_views(artifact)
        for (label, code, lang), tab in zip(files, st.tabs([f[0] for f in files])):
            with tab:
                st.markdown(code_block(code, lang), unsafe_allow_html=True)
                # st.code carries its own copy-to-clipboard button
                with st.expander(f"📋 Copy {label}"):
                    st.code(code, language=lang)

    col_stats, col_log = st.columns(2)
    with col_stats:
        st.markdown("**📊 Website Statistics**")
        st.metric("💾 Size", f"{len(artifact.html) / 1024:.1f} KB")
        if result.warnings:
            with st.expander(f"🔍 {len(result.warnings)} validation notes"):
                for w in result.warnings:
                    st.markdown(f"- {w}")
    with col_log:
        if st.session_state.process_log_entries:
            with st.expander("📝 Process log"):
                st.code("\n".join(st.session_state.process_log_entries), language=None)


if st.session_state.page == "preview":
    render_preview()
else:
    render_form()
