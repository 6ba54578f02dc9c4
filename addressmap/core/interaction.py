"""
Pointer interaction for rendered address markers.

Per point, hover runs ``IDLE -> HOVERED -> IDLE`` and, independently, a
click runs ``IDLE -> SELECTION_PENDING -> IDLE``. Hover is presentational
only. A click is resolved through the point's row index in the current
render pass, never through object identity, then forwarded to the host.
"""

from collections.abc import Iterable
from enum import Enum

from pydantic import BaseModel

from addressmap.configs.logging_init import logger
from addressmap.core.exceptions import SelectionProtocolUnavailable
from addressmap.core.selection import SelectionProtocol, ValueSelector
from addressmap.models.map_data import RenderPass, RenderPoint


class PointState(str, Enum):
    IDLE = "idle"
    HOVERED = "hovered"
    SELECTION_PENDING = "selection_pending"


class MarkerStyle(BaseModel):
    stroke: str
    stroke_width: float
    opacity: float


RESTING_STYLE = MarkerStyle(stroke="#fff", stroke_width=1.5, opacity=0.8)
HIGHLIGHT_STYLE = MarkerStyle(stroke="#000", stroke_width=2, opacity=1.0)


class HighlightDirective(BaseModel):
    row_index: int
    style: MarkerStyle


class TooltipDirective(BaseModel):
    row_index: int
    visible: bool
    address: str | None = None
    value: float | None = None

    @property
    def value_label(self) -> str:
        return f"Value: {format_value(self.value)}" if self.value is not None else ""


class HoverDirectives(BaseModel):
    highlight: HighlightDirective
    tooltip: TooltipDirective


class SelectionRequest(BaseModel):
    """Outcome of one click, as sent to the host."""

    row_index: int
    element_id: int
    binding_path: str
    dimension_index: int = 0
    protocol_issued: bool = False
    direct_issued: bool = False


def format_value(value: float | None) -> str:
    """Thousands separators and at most three fraction digits."""
    if value is None:
        return ""
    if value != value:
        return "NaN"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class InteractionController:
    """Bind pointer events on one render pass to host selections.

    Args:
        render_pass: Current render pass; rebuilt controllers replace old ones
        selections: Scoped selection protocol, or None while the host is not ready
        value_selector: Direct row-index selection entry point
        binding_path: Data binding the selection is scoped to
        dimension_index: Dimension receiving the selection
        hovered: Row indices already hovered (restored from client state)
    """

    def __init__(
        self,
        render_pass: RenderPass,
        selections: SelectionProtocol | None = None,
        value_selector: ValueSelector | None = None,
        binding_path: str = "/qHyperCubeDef",
        dimension_index: int = 0,
        hovered: Iterable[int] = (),
    ):
        self.render_pass = render_pass
        self.selections = selections
        self.value_selector = value_selector
        self.binding_path = binding_path
        self.dimension_index = dimension_index
        self._hover: dict[int, PointState] = {i: PointState.HOVERED for i in hovered}
        self._selection: dict[int, PointState] = {}

    def hover_state(self, row_index: int) -> PointState:
        return self._hover.get(row_index, PointState.IDLE)

    def selection_state(self, row_index: int) -> PointState:
        return self._selection.get(row_index, PointState.IDLE)

    def _hit(self, row_index: int, version: str | None = None) -> RenderPoint | None:
        """Resolve an event target to a hit-testable point of this pass."""
        if version is not None and version != self.render_pass.version:
            logger.warning(
                f"Ignoring event for render pass {version}, current is {self.render_pass.version}"
            )
            return None
        point = self.render_pass.point_at(row_index)
        if point is None or not point.is_placeable:
            logger.debug(f"Row {row_index} is not hit-testable")
            return None
        return point

    def hover_enter(self, row_index: int, version: str | None = None) -> HoverDirectives | None:
        point = self._hit(row_index, version)
        if point is None or self.hover_state(row_index) is PointState.HOVERED:
            return None

        self._hover[row_index] = PointState.HOVERED
        return HoverDirectives(
            highlight=HighlightDirective(row_index=row_index, style=HIGHLIGHT_STYLE),
            tooltip=TooltipDirective(
                row_index=row_index,
                visible=True,
                address=point.source_row.address_text,
                value=point.source_row.value,
            ),
        )

    def hover_exit(self, row_index: int) -> HoverDirectives | None:
        if self.hover_state(row_index) is not PointState.HOVERED:
            return None

        self._hover[row_index] = PointState.IDLE
        return HoverDirectives(
            highlight=HighlightDirective(row_index=row_index, style=RESTING_STYLE),
            tooltip=TooltipDirective(row_index=row_index, visible=False),
        )

    def _issue_protocol_selection(self, element_id: int) -> bool:
        if self.selections is None:
            raise SelectionProtocolUnavailable("Host selection object is not available")
        self.selections.begin(self.binding_path)
        self.selections.select(self.dimension_index, [element_id], False)
        self.selections.confirm()
        return True

    def click(self, row_index: int, version: str | None = None) -> SelectionRequest | None:
        """Select the clicked row in the host.

        Issues begin/select/confirm for the row's element identifier, then the
        direct row-index selection. A missing selection object only skips the
        first step and is logged.

        Returns:
            The issued request, or None when the target is not hit-testable.
        """
        point = self._hit(row_index, version)
        if point is None:
            return None

        row = point.source_row
        request = SelectionRequest(
            row_index=row.row_index,
            element_id=row.element_id,
            binding_path=self.binding_path,
            dimension_index=self.dimension_index,
        )

        self._selection[row_index] = PointState.SELECTION_PENDING
        try:
            try:
                request.protocol_issued = self._issue_protocol_selection(row.element_id)
            except SelectionProtocolUnavailable as e:
                logger.error(f"Selection skipped for row {row_index}: {e}")

            # TODO: drop the direct row-index call once the host confirms
            # begin/select/confirm alone drives its selection state.
            if self.value_selector is not None:
                self.value_selector.select_values(
                    self.binding_path, self.dimension_index, [row.row_index], True
                )
                request.direct_issued = True
            else:
                logger.error(f"Direct value selection unavailable for row {row_index}")
        finally:
            self._selection[row_index] = PointState.IDLE

        logger.info(
            f"Row {row_index} (element {row.element_id}) selected: "
            f"protocol={request.protocol_issued}, direct={request.direct_issued}"
        )
        return request
