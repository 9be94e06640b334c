"""Gradio web interface for the countdown timeline planner.

This module creates the editor: a chart of every stream against the
countdown window with overlap bands, plus controls to edit streams,
one-shot blocks and repeating actions, drag bars by a pixel offset,
switch zoom levels and import or export plain text.

The document lives in per-session state and is saved after every edit.
"""

import logging

import gradio as gr

from timeline_planner.document import (
    reset_document,
    set_chart_title,
    set_total_duration,
)
from timeline_planner.models.core_models import DragTarget, TimelineDocument
from timeline_planner.models.settings_models import DURATION_OPTIONS
from timeline_planner.storage import DocumentStore
from timeline_planner.text_io import ImportFormatError
from timeline_planner.ui_updates import (
    add_block,
    apply_drag,
    block_choices,
    block_fields,
    edit_one_shot,
    edit_repeating,
    edit_stream,
    export_document,
    import_document,
    remove_block,
    render_timeline,
    stream_choices,
    stream_fields,
    zoom_in_label,
    zoom_labels,
    zoom_out_label,
)

logger = logging.getLogger(__name__)

store = DocumentStore()


def _duration_label(total: float) -> str | None:
    for label, value in DURATION_OPTIONS.items():
        if value == total:
            return label
    return None


def commit(document: TimelineDocument, zoom_label: str) -> tuple:
    """Persist a document and re-render the chart.

    Returns:
        Tuple of (document, figure, overlap_text).
    """
    store.save(document)
    figure, overlaps = render_timeline(document, zoom_label)
    return document, figure, overlaps


def refresh_selectors(document: TimelineDocument, stream_id: str | None) -> tuple:
    """Stream and block selector updates plus the editor field values."""
    streams = stream_choices(document)
    ids = [value for _, value in streams]
    if stream_id not in ids:
        stream_id = ids[0] if ids else None
    blocks = block_choices(document, stream_id)
    block_id = blocks[0][1] if blocks else None
    return (
        gr.update(choices=streams, value=stream_id),
        gr.update(choices=blocks, value=block_id),
        *stream_fields(document, stream_id),
        *block_fields(document, stream_id, block_id),
    )


def initialize_app(document: TimelineDocument, zoom_label: str) -> list:
    """Populate every output with the loaded document."""
    _, figure, overlaps = commit(document, zoom_label)
    return [
        figure,
        overlaps,
        document.chart_title,
        _duration_label(document.total_duration),
        *refresh_selectors(document, None),
    ]


def create_gradio_interface() -> gr.Blocks:
    """Create and configure the timeline editor interface.

    Returns:
        Configured Gradio Blocks interface ready for launching.
    """
    with gr.Blocks(title="Countdown Timeline Planner") as interface:
        gr.Markdown("# Countdown Timeline Planner")
        gr.Markdown(
            "Lay out one-shot and repeating actions against the countdown. "
            "Red bands mark spans where checked one-shot effects overlap."
        )

        document_state = gr.State(store.load())

        with gr.Row():
            chart_title = gr.Textbox(label="Chart Title", scale=3)
            total_duration = gr.Radio(
                choices=list(DURATION_OPTIONS.keys()),
                label="Countdown Length",
                scale=2,
            )
            zoom = gr.Dropdown(
                choices=zoom_labels(),
                value=zoom_labels()[0],
                label="Zoom",
                scale=1,
            )
            with gr.Column(scale=0, min_width=80):
                zoom_in_button = gr.Button("+", size="sm")
                zoom_out_button = gr.Button("-", size="sm")

        chart = gr.Plot(label="Timeline", elem_id="timeline-plot")
        overlap_text = gr.Textbox(label="Overlaps", lines=3, interactive=False)

        with gr.Row():
            # Stream and repeating action
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### Stream")
                    stream_select = gr.Dropdown(label="Stream", choices=[])
                    stream_name = gr.Textbox(label="Name")
                    check_overlap = gr.Checkbox(
                        label="Check overlaps",
                        info="Include this stream's one-shot effects in overlap checks.",
                    )
                with gr.Group():
                    gr.Markdown("### Repeating Action")
                    with gr.Row():
                        repeat_start = gr.Number(label="Start (elapsed s)", step=0.001)
                        repeat_cast = gr.Number(label="Cast delay (s)", step=0.001)
                    with gr.Row():
                        repeat_duration = gr.Number(label="Duration (s)", step=0.01)
                        repeat_gap = gr.Number(label="Gap (s)", step=1)
                    repeat_unique = gr.Checkbox(label="Unique duration")

            # One-shot blocks
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### One-shot Blocks")
                    block_select = gr.Dropdown(label="Block", choices=[])
                    block_remaining = gr.Textbox(
                        label="Start (remaining, M:SS.mmm)",
                        info="Remaining time on the countdown when the action is issued.",
                    )
                    with gr.Row():
                        block_cast = gr.Number(label="Cast delay (s)", step=0.001)
                        block_duration = gr.Number(label="Duration (s)", step=0.01)
                    block_unique = gr.Checkbox(label="Unique duration")
                    with gr.Row():
                        add_button = gr.Button("Add block")
                        remove_button = gr.Button("Remove block", variant="stop")

                with gr.Group():
                    gr.Markdown("### Drag")
                    drag_pixels = gr.Slider(
                        -600,
                        600,
                        value=0,
                        step=1,
                        label="Drag offset (px)",
                        info="Pointer movement applied at the current zoom level.",
                    )
                    with gr.Row():
                        drag_block_button = gr.Button("Drag selected block")
                        drag_repeat_button = gr.Button("Drag repeating action")

            # Import / export
            with gr.Column(scale=1):
                with gr.Group():
                    gr.Markdown("### Import")
                    import_text = gr.Textbox(
                        label="Streams",
                        lines=6,
                        placeholder="Striker1, 2, 0, 20, 30\nHealer, 2, 2.5, 15, 60",
                        info="One stream per line: name, start, cast delay, duration, gap.",
                    )
                    import_button = gr.Button("Import (replaces all streams)")
                with gr.Group():
                    gr.Markdown("### Export")
                    export_button = gr.Button("Export callouts")
                    export_text = gr.Textbox(label="Callouts", lines=8)
                reset_button = gr.Button("Reset to defaults", variant="stop")

        render_outputs = [document_state, chart, overlap_text]
        selector_outputs = [
            stream_select,
            block_select,
            stream_name,
            check_overlap,
            repeat_start,
            repeat_cast,
            repeat_duration,
            repeat_gap,
            repeat_unique,
            block_remaining,
            block_cast,
            block_duration,
            block_unique,
        ]
        stream_editor = [stream_name, check_overlap]
        repeat_editor = [
            repeat_start,
            repeat_cast,
            repeat_duration,
            repeat_gap,
            repeat_unique,
        ]
        block_editor = [block_remaining, block_cast, block_duration, block_unique]

        # INITIALIZE on page load
        interface.load(
            fn=initialize_app,
            inputs=[document_state, zoom],
            outputs=[chart, overlap_text, chart_title, total_duration]
            + selector_outputs,
        )

        def reselect(document, stream_id):
            return refresh_selectors(document, stream_id)

        def then_reselect(event):
            event.then(
                fn=reselect,
                inputs=[document_state, stream_select],
                outputs=selector_outputs,
            )

        def select_block(document, stream_id, block_id):
            return block_fields(document, stream_id, block_id)

        # Header
        zoom.change(fn=commit, inputs=[document_state, zoom], outputs=render_outputs)
        zoom_in_button.click(fn=zoom_in_label, inputs=[zoom], outputs=[zoom])
        zoom_out_button.click(fn=zoom_out_label, inputs=[zoom], outputs=[zoom])
        chart_title.input(
            fn=lambda d, t, z: commit(set_chart_title(d, t), z),
            inputs=[document_state, chart_title, zoom],
            outputs=render_outputs,
        )
        total_duration_event = total_duration.input(
            fn=lambda d, label, z: commit(
                set_total_duration(d, DURATION_OPTIONS[label]), z
            ),
            inputs=[document_state, total_duration, zoom],
            outputs=render_outputs,
        )
        then_reselect(total_duration_event)

        # Selection
        stream_select.input(
            fn=reselect,
            inputs=[document_state, stream_select],
            outputs=selector_outputs,
        )
        block_select.input(
            fn=select_block,
            inputs=[document_state, stream_select, block_select],
            outputs=block_editor,
        )

        # Stream edits
        for widget in stream_editor:
            widget.input(
                fn=lambda d, s, name, check, z: commit(
                    edit_stream(d, s, name, check), z
                ),
                inputs=[document_state, stream_select] + stream_editor + [zoom],
                outputs=render_outputs,
            )

        # Repeating edits
        for widget in repeat_editor:
            widget.input(
                fn=lambda d, s, start, cast, dur, gap, unique, z: commit(
                    edit_repeating(d, s, start, cast, dur, gap, unique), z
                ),
                inputs=[document_state, stream_select] + repeat_editor + [zoom],
                outputs=render_outputs,
            ).then(
                fn=lambda d, s: stream_fields(d, s)[2:],
                inputs=[document_state, stream_select],
                outputs=repeat_editor,
            )

        # One-shot edits
        for widget in block_editor:
            event = widget.submit if widget is block_remaining else widget.input
            event(
                fn=lambda d, s, b, rem, cast, dur, unique, z: commit(
                    edit_one_shot(d, s, b, rem, cast, dur, unique), z
                ),
                inputs=[document_state, stream_select, block_select]
                + block_editor
                + [zoom],
                outputs=render_outputs,
            ).then(
                fn=select_block,
                inputs=[document_state, stream_select, block_select],
                outputs=block_editor,
            )

        then_reselect(
            add_button.click(
                fn=lambda d, s, z: commit(add_block(d, s), z),
                inputs=[document_state, stream_select, zoom],
                outputs=render_outputs,
            )
        )
        then_reselect(
            remove_button.click(
                fn=lambda d, s, b, z: commit(remove_block(d, s, b), z),
                inputs=[document_state, stream_select, block_select, zoom],
                outputs=render_outputs,
            )
        )

        # Drag
        def drag_block(document, stream_id, block_id, pixels, zoom_label):
            if not stream_id or not block_id:
                gr.Warning("Select a block to drag.")
                return commit(document, zoom_label)
            target = DragTarget(stream_id=stream_id, kind="one_shot", block_id=block_id)
            return commit(apply_drag(document, target, pixels, zoom_label), zoom_label)

        def drag_repeating(document, stream_id, pixels, zoom_label):
            if not stream_id:
                gr.Warning("Select a stream to drag.")
                return commit(document, zoom_label)
            target = DragTarget(stream_id=stream_id, kind="repeating", index=0)
            return commit(apply_drag(document, target, pixels, zoom_label), zoom_label)

        then_reselect(
            drag_block_button.click(
                fn=drag_block,
                inputs=[document_state, stream_select, block_select, drag_pixels, zoom],
                outputs=render_outputs,
            )
        )
        then_reselect(
            drag_repeat_button.click(
                fn=drag_repeating,
                inputs=[document_state, stream_select, drag_pixels, zoom],
                outputs=render_outputs,
            )
        )

        # Import / export / reset
        def run_import(document, text, zoom_label):
            try:
                document = import_document(document, text)
            except ImportFormatError as e:
                logger.warning(f"Import rejected: {e}")
                gr.Warning(str(e))
            return commit(document, zoom_label)

        then_reselect(
            import_button.click(
                fn=run_import,
                inputs=[document_state, import_text, zoom],
                outputs=render_outputs,
            )
        )
        export_button.click(
            fn=export_document, inputs=[document_state], outputs=[export_text]
        )
        then_reselect(
            reset_button.click(
                fn=lambda d, z: commit(reset_document(d), z),
                inputs=[document_state, zoom],
                outputs=render_outputs,
            ).then(
                fn=lambda d: _duration_label(d.total_duration),
                inputs=[document_state],
                outputs=[total_duration],
            )
        )

    return interface


if __name__ == "__main__":
    import asyncio
    import sys

    logging.basicConfig(level=logging.INFO)
    # Reduce logging verbosity for asyncio to suppress connection noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Windows-specific: Use SelectorEventLoop to avoid ProactorEventLoop issues
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    demo = create_gradio_interface()
    demo.launch(
        share=False,
        debug=True,
        show_error=True,
        server_port=7860,
    )
