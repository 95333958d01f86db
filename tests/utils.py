from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Sequence, Tuple

CONTAINER_XML = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def xhtml(body: str) -> str:
    """Wrap body markup in a minimal XHTML document."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        "<html xmlns='http://www.w3.org/1999/xhtml'><head><title>t</title></head>"
        f"<body>{body}</body></html>"
    )


def build_epub_bytes(
    documents: Sequence[Tuple[str, str]],
    *,
    opf_dir: str = "OEBPS",
    spine: Sequence[str] | None = None,
    mimetype: str | None = "application/epub+zip",
    include_container: bool = True,
    extra_manifest: Sequence[Tuple[str, str]] = (),
    omit_files: Sequence[str] = (),
) -> bytes:
    """Create an in-memory EPUB with the given (href, markup) content documents.

    ``spine`` lists hrefs in reading order (defaults to declaration order).
    ``extra_manifest`` declares additional (href, media-type) items without
    writing them; ``omit_files`` declares documents without writing them.
    """
    opf_path = f"{opf_dir}/content.opf" if opf_dir else "content.opf"
    ids = {href: f"item{idx}" for idx, (href, _) in enumerate(documents, start=1)}
    manifest_items = [
        f'<item id="{ids[href]}" href="{href}" media-type="application/xhtml+xml"/>'
        for href, _ in documents
    ]
    for idx, (href, media_type) in enumerate(extra_manifest, start=1):
        manifest_items.append(f'<item id="extra{idx}" href="{href}" media-type="{media_type}"/>')
    spine_hrefs = list(spine) if spine is not None else [href for href, _ in documents]
    spine_items = "".join(f'<itemref idref="{ids[href]}"/>' for href in spine_hrefs)
    opf = f"""<?xml version="1.0" encoding="utf-8"?>
<package version="3.0" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Test</dc:title>
  </metadata>
  <manifest>
    {''.join(manifest_items)}
  </manifest>
  <spine>{spine_items}</spine>
</package>
"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        if mimetype is not None:
            zf.writestr("mimetype", mimetype, compress_type=zipfile.ZIP_STORED)
        if include_container:
            zf.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
        zf.writestr(opf_path, opf)
        for href, body in documents:
            if href in omit_files:
                continue
            file_path = f"{opf_dir}/{href}" if opf_dir else href
            zf.writestr(file_path, body)
    return buffer.getvalue()


def write_minimal_epub(path: Path, chapters: list[str], **kwargs) -> None:
    """Create a minimal EPUB file with the provided XHTML chapters."""
    documents = [
        (f"chapter{idx}.xhtml", chapter) for idx, chapter in enumerate(chapters, start=1)
    ]
    path.write_bytes(build_epub_bytes(documents, **kwargs))


def sentence_text(words: int, long_words: int, sentences: int) -> str:
    """Build prose with exact word, long-word and sentence counts."""
    assert words >= sentences > 0 and words - sentences >= long_words
    per_sentence = [words // sentences] * sentences
    for idx in range(words % sentences):
        per_sentence[idx] += 1
    remaining_long = long_words
    out: list[str] = []
    for count in per_sentence:
        tokens = []
        for position in range(count):
            if remaining_long and position > 0:
                tokens.append("elephants")
                remaining_long -= 1
            else:
                tokens.append("Cat" if position == 0 else "cat")
        out.append(" ".join(tokens) + ".")
    assert remaining_long == 0
    return " ".join(out)
