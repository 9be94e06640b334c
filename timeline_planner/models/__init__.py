"""Domain models for the timeline planner.

This module provides a centralized location for all data models used
throughout the timeline engine and editor. It includes:

- Core document models (EffectInterval, RepeatingEventSpec, EventStream, ...)
- Drag gesture context (DragTarget, DragState)
- Configuration (TimelineSettings, ZoomLevel)
- Derived view containers for rendering

All models are built using Pydantic for validation and serialization.
"""

# Re-export core models
from timeline_planner.models.core_models import (
    DragState,
    DragTarget,
    EffectInterval,
    EventStream,
    Occurrence,
    OneShotBlock,
    OverlapRange,
    RepeatingEventSpec,
    TimelineDocument,
)

# Re-export setting models
from timeline_planner.models.settings_models import (
    DURATION_OPTIONS,
    ZOOM_LEVELS,
    TimelineSettings,
    ZoomLevel,
)

# Re-export view models
from timeline_planner.models.view_models import (
    BarView,
    GridView,
    StreamRowView,
    TimelineView,
)
