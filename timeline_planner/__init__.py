"""Countdown timeline planning library.

This package provides the computation engine and editor for laying out
one-shot and repeating timed actions against a fixed countdown window,
so that a planner can see at a glance whether scheduled effects collide.

The engine consists of:
1. Elapsed/remaining time conversion and countdown-style formatting
2. Unique-duration toggling for effect lengths
3. Expansion of repeating actions into concrete occurrences
4. Overlap detection across one-shot effects
5. Pointer-drag to time mapping under magnification
6. Zoom-dependent gridline layout

Example:
    Basic usage through the pipeline API:

    >>> from timeline_planner.document import default_document
    >>> from timeline_planner.pipeline import build_timeline_view
    >>>
    >>> document = default_document()
    >>> view = build_timeline_view(document, zoom_index=0)
    >>> [(r.start, r.end) for r in view.overlaps]
    []
"""
