"""
Address map pipeline.

raw rows -> parse_address -> CoordinateResolver -> project_row (ScaleContext)
-> RenderPass -> InteractionController -> host selection.
"""
