"""Address point map: geocoded address markers over a US states map."""
