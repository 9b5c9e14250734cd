import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

Rect = Tuple[float, float, float, float]


class AnnotationType(Enum):
    RECTANGLE = "rectangle"
    REDACTION = "redaction"


class SelectionAction(Enum):
    SELECTED = "selected"
    DESELECTED = "deselected"


DEFAULT_COLORS = {
    AnnotationType.RECTANGLE: (74, 158, 255),
    AnnotationType.REDACTION: (220, 40, 40),
}


def normalize_rect(rect: Rect) -> Rect:
    """Order the corners so that x0 <= x1 and y0 <= y1."""
    x0, y0, x1, y1 = (float(v) for v in rect)
    return (min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1))


def new_annotation_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Annotation:
    """A single annotation placed on a PDF page."""
    page_index: int  # 0-based page index
    annotation_type: AnnotationType
    rect: Rect  # (x0, y0, x1, y1) in PDF points, y grows downward
    color: Tuple[int, int, int] = (74, 158, 255)
    stroke_width: float = 2.0
    id: str = field(default_factory=new_annotation_id)

    def __post_init__(self):
        self.rect = normalize_rect(self.rect)
        self.color = tuple(self.color)

    @property
    def page_number(self) -> int:
        """1-based page number."""
        return self.page_index + 1

    @property
    def x(self) -> float:
        return self.rect[0]

    @property
    def y(self) -> float:
        return self.rect[1]

    @property
    def width(self) -> float:
        return self.rect[2] - self.rect[0]

    @property
    def height(self) -> float:
        return self.rect[3] - self.rect[1]

    def contains(self, x: float, y: float, tolerance: float = 0.0) -> bool:
        """Check whether a point in PDF coordinates lies on the annotation."""
        x0, y0, x1, y1 = self.rect
        return (x0 - tolerance <= x <= x1 + tolerance and
                y0 - tolerance <= y <= y1 + tolerance)

    def to_dict(self):
        """Convert annotation to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'page_index': self.page_index,
            'type': self.annotation_type.value,
            'rect': list(self.rect),
            'color': list(self.color),
            'stroke_width': self.stroke_width,
        }

    @staticmethod
    def from_dict(data):
        """Create annotation from dictionary."""
        return Annotation(
            page_index=data['page_index'],
            annotation_type=AnnotationType(data['type']),
            rect=tuple(data['rect']),
            color=tuple(data.get('color', DEFAULT_COLORS[AnnotationType(data['type'])])),
            stroke_width=data.get('stroke_width', 2.0),
            id=data.get('id') or new_annotation_id(),
        )
