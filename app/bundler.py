"""
GeneratedArtifact ➜ downloadable ZIP.

index.html is always the complete generated page. styles.css / script.js are
added only when CSS / JS were actually pulled out of it; uploaded images go
under assets/ so the paths mentioned in the prompt resolve.
"""

import io
import zipfile
from typing import Iterable

from extractor import has_separate_css, has_separate_js
from schema_profile import GeneratedArtifact, MediaFile
from utils import slugify


def archive_name(name: str) -> str:
    return f"{slugify(name) or 'my'}-portfolio.zip"


def build_zip(artifact: GeneratedArtifact, media: Iterable[MediaFile] = ()) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("index.html", artifact.html)
        if has_separate_css(artifact):
            zf.writestr("styles.css", artifact.css)
        if has_separate_js(artifact):
            zf.writestr("script.js", artifact.js)
        for m in media:
            if m.kind == "image" and m.data:
                zf.writestr(m.asset_path, m.data)
    return buf.getvalue()
