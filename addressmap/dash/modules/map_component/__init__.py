"""
Address Map Component Module.

Plots geocoded address markers, sized and colored by a measure, over US
state boundaries, and forwards marker clicks to the host selection.
"""
