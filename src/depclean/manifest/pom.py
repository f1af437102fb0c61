"""PomManifest - In-memory POM with mutable dependency sections."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from depclean.manifest.exceptions import ManifestError
from depclean.manifest.models import DependencyKey, DependencyRecord

logger = logging.getLogger("depclean.manifest")

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
DEFAULT_INDENT = "    "

ET.register_namespace("", POM_NAMESPACE)

_NAMESPACE_RE = re.compile(r"^(\{[^}]*\})")


class PomManifest:
    """A parsed pom.xml whose dependency sections can be edited and written back.

    Only the <dependencies> and <dependencyManagement><dependencies>
    sections are rebuilt on write. Everything else is serialized as parsed.
    """

    def __init__(self, tree: ET.ElementTree, path: Path | None = None) -> None:
        """Initialize from a parsed document.

        Args:
            tree: The parsed POM document.
            path: File the document was read from, if any.
        """
        self.tree = tree
        self.path = path
        root = tree.getroot()
        match = _NAMESPACE_RE.match(root.tag)
        self._ns = match.group(1) if match else ""

        self.dependencies = self._read_dependencies(self._find("dependencies"))
        self.dependency_management = self._read_dependencies(
            self._find("dependencyManagement", "dependencies")
        )

    @classmethod
    def load(cls, path: Path | str) -> PomManifest:
        """Parse a POM file, keeping comments.

        Raises:
            ManifestError: If the file is missing or not well-formed XML.
        """
        path = Path(path)
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            tree = ET.parse(path, parser=parser)
        except OSError as e:
            raise ManifestError(f"Cannot read POM {path}: {e}") from e
        except ET.ParseError as e:
            raise ManifestError(f"Invalid POM {path}: {e}") from e
        return cls(tree, path)

    @classmethod
    def from_string(cls, text: str) -> PomManifest:
        """Parse POM content held in memory."""
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        try:
            root = ET.fromstring(text, parser=parser)
        except ET.ParseError as e:
            raise ManifestError(f"Invalid POM: {e}") from e
        return cls(ET.ElementTree(root))

    @property
    def root(self) -> ET.Element:
        return self.tree.getroot()

    def text(self, *path: str) -> str | None:
        """Stripped text of the element at path below <project>, or None."""
        element = self._find(*path)
        if element is None or element.text is None:
            return None
        return element.text.strip() or None

    def texts(self, *path: str) -> list[str]:
        """Stripped texts of all elements matching path below <project>."""
        found = self.root.findall("/".join(self._tag(p) for p in path))
        return [e.text.strip() for e in found if e.text and e.text.strip()]

    @property
    def parent_key(self) -> DependencyKey | None:
        """Coordinates declared in <parent>, if any."""
        group_id = self.text("parent", "groupId")
        artifact_id = self.text("parent", "artifactId")
        if group_id is None or artifact_id is None:
            return None
        return DependencyKey(group_id, artifact_id)

    def write(self, path: Path | str) -> None:
        """Serialize the manifest with its current dependency sections.

        Raises:
            OSError: If the file cannot be written.
        """
        self._sync_section(("dependencies",), self.dependencies)
        self._sync_section(("dependencyManagement", "dependencies"), self.dependency_management)
        with open(path, "wb") as f:
            self.tree.write(f, encoding="UTF-8", xml_declaration=True)
        logger.debug("Wrote POM to %s", path)

    def to_string(self) -> str:
        """Serialize to a string, as write() would."""
        self._sync_section(("dependencies",), self.dependencies)
        self._sync_section(("dependencyManagement", "dependencies"), self.dependency_management)
        return ET.tostring(self.root, encoding="unicode")

    def _tag(self, name: str) -> str:
        return f"{self._ns}{name}"

    def _find(self, *path: str) -> ET.Element | None:
        return self.root.find("/".join(self._tag(p) for p in path))

    def _child_text(self, element: ET.Element, name: str) -> str | None:
        child = element.find(self._tag(name))
        if child is None or child.text is None:
            return None
        return child.text.strip() or None

    def _read_dependencies(self, section: ET.Element | None) -> list[DependencyRecord]:
        if section is None:
            return []
        records = []
        for element in section.findall(self._tag("dependency")):
            group_id = self._child_text(element, "groupId")
            artifact_id = self._child_text(element, "artifactId")
            if group_id is None or artifact_id is None:
                raise ManifestError(
                    f"Dependency without groupId/artifactId in {self.path or '<string>'}"
                )
            records.append(
                DependencyRecord(
                    group_id=group_id,
                    artifact_id=artifact_id,
                    version=self._child_text(element, "version"),
                    scope=self._child_text(element, "scope"),
                    element=element,
                )
            )
        return records

    def _to_element(self, record: DependencyRecord) -> ET.Element:
        if record.element is not None:
            return record.element
        element = ET.Element(self._tag("dependency"))
        ET.SubElement(element, self._tag("groupId")).text = record.group_id
        ET.SubElement(element, self._tag("artifactId")).text = record.artifact_id
        if record.version:
            ET.SubElement(element, self._tag("version")).text = record.version
        if record.scope:
            ET.SubElement(element, self._tag("scope")).text = record.scope
        return element

    def _sync_section(self, path: tuple[str, ...], records: list[DependencyRecord]) -> None:
        section = self._find(*path)
        if section is None:
            if not records:
                return
            section = self._create_section(path)

        for child in list(section):
            section.remove(child)
        for record in records:
            if record is not None:
                section.append(self._to_element(record))

        if not len(section):
            section.text = None
            return
        ET.indent(section, space=self._indent_unit(), level=len(path))

    def _create_section(self, path: tuple[str, ...]) -> ET.Element:
        unit = self._indent_unit()
        parent = self.root
        for level, name in enumerate(path, start=1):
            child = parent.find(self._tag(name))
            if child is None:
                child = self._append_indented(parent, name, level, unit)
            parent = child
        return parent

    def _append_indented(
        self, parent: ET.Element, name: str, level: int, unit: str
    ) -> ET.Element:
        # Only the new element and the whitespace around it are touched
        if len(parent):
            parent[-1].tail = "\n" + unit * level
        else:
            parent.text = "\n" + unit * level
        child = ET.SubElement(parent, self._tag(name))
        child.tail = "\n" + unit * (level - 1)
        return child

    def _indent_unit(self) -> str:
        text = self.root.text or ""
        if "\n" in text:
            unit = text.rsplit("\n", 1)[1]
            if unit and not unit.strip():
                return unit
        return DEFAULT_INDENT
