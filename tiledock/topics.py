"""
Event Topics for tiledock

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>
"""

# Layout state notifications
LAYOUT_CHANGED = "layout.changed"
"""Published after every change of the committed layout. Params: layout"""

# Drag gesture lifecycle
DRAG_STARTED = "drag.started"
"""Published when a drag gesture begins. Params: kind, item_id"""

DRAG_PREVIEWED = "drag.previewed"
"""Published when the preview layout of the active gesture changes. Params: kind, item_id"""

DRAG_COMMITTED = "drag.committed"
"""Published when a gesture is committed into the layout. Params: kind, item_id"""

DRAG_CANCELLED = "drag.cancelled"
"""Published when a gesture ends without a commit. Params: kind, item_id"""

# Command events (imperative - tell components to do something)
# These are triggered by UI controls such as the tab strip or close button

CMD_SELECT_TAB = "cmd.select_tab"
"""Command: Make a module the acting tab. Params: window_id, module_id"""

CMD_CLOSE_TAB = "cmd.close_tab"
"""Command: Remove a module from its window. Params: window_id, module_id"""

CMD_CLOSE_WINDOW = "cmd.close_window"
"""Command: Remove a window and all its modules. Params: window_id"""

CMD_RESIZE_WINDOW = "cmd.resize_window"
"""Command: Set window dimensions in cells. Params: window_id, width, height"""
