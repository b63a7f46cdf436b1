from .mention import mention_target, render_highlight_markup, render_message_markup

__all__ = [
    "mention_target",
    "render_highlight_markup",
    "render_message_markup",
]
