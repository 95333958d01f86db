from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from .errors import FormatError
from .models import ManifestItem, PackageDocument

logger = logging.getLogger(__name__)

EPUB_MIMETYPE = "application/epub+zip"
CONTAINER_PATH = "META-INF/container.xml"
CONTENT_MEDIA_TYPE = "application/xhtml+xml"


def read_epub_bytes(source: str | Path | bytes) -> bytes:
    """Return the raw archive bytes for a path or an in-memory buffer."""
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    path = Path(source)
    if not path.is_file():
        raise FormatError(f"EPUB file not found: {path}")
    return path.read_bytes()


def open_container(data: bytes) -> zipfile.ZipFile:
    """Open the archive and verify that it declares the EPUB media type."""
    try:
        zf = zipfile.ZipFile(io.BytesIO(data), "r")
    except zipfile.BadZipFile as exc:
        raise FormatError("Invalid EPUB archive: not a zip file") from exc
    try:
        mimetype = zf.read("mimetype").decode("ascii", errors="replace").strip()
    except KeyError:
        zf.close()
        raise FormatError(
            f"Invalid file type. Expected '{EPUB_MIMETYPE}', but the archive has no mimetype entry."
        ) from None
    if mimetype != EPUB_MIMETYPE:
        zf.close()
        raise FormatError(
            f"Invalid file type. Expected '{EPUB_MIMETYPE}', got '{mimetype}'."
        )
    return zf


def locate_package_path(zf: zipfile.ZipFile) -> str:
    """Return the path of the OPF package document declared in container.xml."""
    try:
        container_xml = zf.read(CONTAINER_PATH)
    except KeyError as exc:
        raise FormatError(f"EPUB missing {CONTAINER_PATH}") from exc
    except (zipfile.BadZipFile, NotImplementedError, OSError) as exc:
        raise FormatError(f"Unable to read {CONTAINER_PATH}: {exc}") from exc
    try:
        root = ET.fromstring(container_xml)
    except (ET.ParseError, LookupError, ValueError) as exc:
        raise FormatError("Unable to parse container.xml") from exc
    rootfile = root.find(".//{*}rootfile")
    if rootfile is None:
        raise FormatError("container.xml missing rootfile element")
    package_path = rootfile.attrib.get("full-path")
    if not package_path:
        raise FormatError("rootfile missing full-path attribute")
    return package_path


def load_package_document(zf: zipfile.ZipFile, package_path: str) -> PackageDocument:
    """Parse the OPF package document into its manifest and spine."""
    try:
        opf_xml = zf.read(package_path)
    except KeyError as exc:
        raise FormatError(f"Could not find package document at path: {package_path}") from exc
    except (zipfile.BadZipFile, NotImplementedError, OSError) as exc:
        raise FormatError(f"Unable to read package document {package_path}: {exc}") from exc
    try:
        root = ET.fromstring(opf_xml)
    except (ET.ParseError, LookupError, ValueError) as exc:
        raise FormatError(f"Unable to parse package document {package_path}") from exc
    if _local_name(root.tag) != "package":
        raise FormatError(f"{package_path} is not an OPF package document")
    manifest_el = root.find("{*}manifest")
    if manifest_el is None:
        raise FormatError(f"{package_path} has no manifest")

    manifest: list[ManifestItem] = []
    for item in manifest_el.findall("{*}item"):
        href = item.attrib.get("href")
        if not href:
            continue
        manifest.append(
            ManifestItem(
                item_id=item.attrib.get("id", ""),
                href=href,
                media_type=item.attrib.get("media-type", ""),
            )
        )

    spine: list[str] = []
    spine_el = root.find("{*}spine")
    if spine_el is not None:
        for itemref in spine_el.findall("{*}itemref"):
            idref = itemref.attrib.get("idref")
            if idref:
                spine.append(idref)

    root_dir = PurePosixPath(package_path).parent.as_posix()
    return PackageDocument(
        package_path=package_path,
        root_dir="" if root_dir == "." else root_dir,
        manifest=tuple(manifest),
        spine=tuple(spine),
    )


def content_item_paths(
    package: PackageDocument, reading_order: str = "manifest"
) -> list[str]:
    """Return archive paths of the XHTML content documents in the package.

    ``manifest`` keeps manifest declaration order. ``spine`` orders documents
    by the spine and appends any remaining manifest documents.
    """
    items = [item for item in package.manifest if item.media_type == CONTENT_MEDIA_TYPE]
    if not items:
        raise FormatError("Could not find any XHTML content in the manifest")

    if reading_order == "spine" and package.spine:
        position = {idref: index for index, idref in enumerate(package.spine)}
        # sorted() is stable, so unreferenced items keep manifest order
        items = sorted(items, key=lambda item: position.get(item.item_id, len(position)))

    paths = [resolve_href(package.root_dir, item.href) for item in items]
    logger.debug("Resolved %d content documents from %s", len(paths), package.package_path)
    return paths


def resolve_href(root_dir: str, href: str) -> str:
    """Join a manifest href onto the package directory."""
    relative = PurePosixPath(unquote(href))
    if not root_dir:
        return relative.as_posix()
    return (PurePosixPath(root_dir) / relative).as_posix()


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]
