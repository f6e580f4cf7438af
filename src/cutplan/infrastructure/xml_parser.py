"""Project XML parsing into raw piece records.

Furniture design tools export projects as XML documents shaped like::

    <Projeto nome="Cozinha">
      <Pecas>
        <Peca id="LAT" largura="600" altura="720" espessura="18" quantidade="2"/>
        <Peca>
          <id>PRA</id>
          <largura>564</largura>
          ...
        </Peca>
      </Pecas>
    </Projeto>

Element names are matched case-insensitively. Field naming inside each
piece is left untouched; the piece pool builder resolves aliases.
"""

from __future__ import annotations

import logging
from pathlib import Path
from xml.etree import ElementTree as ET

from cutplan.domain import ProjectParseError

logger = logging.getLogger(__name__)

PROJECT_TAG = "projeto"
PIECES_TAG = "pecas"
PIECE_TAG = "peca"


def _local_name(tag: str) -> str:
    """Strip any namespace and lowercase an element tag."""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.lower()


def _children(element: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


class ProjectXmlParser:
    """Extracts piece records from project XML documents."""

    def parse(self, xml_text: str | bytes) -> list[dict[str, str]]:
        """Parse a project document into piece records.

        Each ``Peca`` element becomes one dict holding its attributes plus
        the text of its simple child elements. Attributes win when both
        define the same name.

        Args:
            xml_text: The XML document.

        Returns:
            Piece records in document order. Empty if the document has no
            ``Pecas`` section.

        Raises:
            ProjectParseError: If the document is not well-formed XML.
        """
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            line = e.position[0] if e.position else None
            raise ProjectParseError(f"Invalid project XML: {e}", line=line) from e

        project = self._find_project(root)
        if project is None:
            logger.debug("No <Projeto> element found in document")
            return []

        records: list[dict[str, str]] = []
        for pieces in _children(project, PIECES_TAG):
            for piece in _children(pieces, PIECE_TAG):
                records.append(self._piece_record(piece))

        logger.debug("Parsed %d piece records from project XML", len(records))
        return records

    def parse_file(self, path: Path) -> list[dict[str, str]]:
        """Read and parse a project XML file.

        Raises:
            ProjectParseError: If the file cannot be read or parsed.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ProjectParseError(f"Error reading project file: {path}: {e}") from e
        return self.parse(content)

    def _find_project(self, root: ET.Element) -> ET.Element | None:
        if _local_name(root.tag) == PROJECT_TAG:
            return root
        for element in root.iter():
            if _local_name(element.tag) == PROJECT_TAG:
                return element
        return None

    def _piece_record(self, piece: ET.Element) -> dict[str, str]:
        record: dict[str, str] = {}
        for child in piece:
            if len(child) == 0 and child.text is not None:
                record[_local_name(child.tag)] = child.text.strip()
        record.update(piece.attrib)
        return record
