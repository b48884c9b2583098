"""transforms applied to a parsed document: table spans, anchors and TOC."""
