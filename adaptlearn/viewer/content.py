"""
Content renderers - Style-specific lesson content blocks.

One renderer per learning style, picked by get_content_renderer(). The
content itself is static catalog text; renderers only lay it out as HTML.
"""

import html

from adaptlearn.schemas import LearningStyle, Level


def get_content_css() -> str:
    """Get CSS styles for content blocks."""
    return """
    <style>
    .content-block {
        background: #fafafa;
        border-radius: 12px;
        padding: 1.2em 1.5em;
        margin: 1em 0;
        line-height: 1.6;
    }
    .content-visual { border-left: 4px solid #7B1FA2; }
    .content-auditory { border-left: 4px solid #1976D2; }
    .content-reading { border-left: 4px solid #388E3C; }
    .content-kinesthetic { border-left: 4px solid #F57C00; }
    .content-caption {
        color: #666;
        font-size: 0.9em;
        margin-top: 0.5em;
    }
    .content-fallback {
        background: #fffde7;
        border: 1px solid #fbc02d;
        color: #8d6e00;
    }
    </style>
    """


class ContentRenderer:
    """Render a level's content block for one learning style."""

    style: LearningStyle

    def render(self, level: Level) -> str:
        raise NotImplementedError

    def _wrap(self, body: str) -> str:
        return f'<div class="content-block content-{self.style.value}">{body}</div>'


class VisualRenderer(ContentRenderer):
    style = LearningStyle.VISUAL

    def render(self, level: Level) -> str:
        text = level.content.visual
        caption = f"Picture it: {level.title}"
        return self._wrap(
            f'<div class="content-visual-figure">{html.escape(text)}</div>'
            f'<div class="content-caption">{html.escape(caption)}</div>'
        )


class AuditoryRenderer(ContentRenderer):
    """Prompt for narration; the script itself is spoken by a Narrator."""
    style = LearningStyle.AUDITORY

    def render(self, level: Level) -> str:
        return self._wrap(
            f'<p>{html.escape(level.content.auditory)}</p>'
            '<div class="content-caption">Use the narration control to listen.</div>'
        )


class ReadingRenderer(ContentRenderer):
    style = LearningStyle.READING

    def render(self, level: Level) -> str:
        parts = [f'<p>{html.escape(level.content.reading)}</p>']
        if level.reading_points:
            parts.append('<ul>')
            for point in level.reading_points:
                parts.append(f'<li>{html.escape(point)}</li>')
            parts.append('</ul>')
        return self._wrap(''.join(parts))


class KinestheticRenderer(ContentRenderer):
    style = LearningStyle.KINESTHETIC

    def render(self, level: Level) -> str:
        return self._wrap(
            f'<p>{html.escape(level.content.kinesthetic)}</p>'
            '<div class="content-caption">Try it with the controls below.</div>'
        )


class FallbackRenderer(ContentRenderer):
    """Shown when the stored style is not one we know."""

    def __init__(self, requested: str):
        self.requested = requested

    def render(self, level: Level) -> str:
        available = ", ".join(s.value for s in LearningStyle)
        return (
            '<div class="content-block content-fallback">'
            f'Learning style "{html.escape(str(self.requested))}" not found. '
            f'Available styles: {available}'
            '</div>'
        )


_RENDERERS = {
    LearningStyle.VISUAL: VisualRenderer(),
    LearningStyle.AUDITORY: AuditoryRenderer(),
    LearningStyle.READING: ReadingRenderer(),
    LearningStyle.KINESTHETIC: KinestheticRenderer(),
}


def get_content_renderer(style: LearningStyle | str) -> ContentRenderer:
    """Pick the renderer for a style tag."""
    try:
        return _RENDERERS[LearningStyle(style)]
    except ValueError:
        return FallbackRenderer(str(style))


def render_level_content(level: Level, style: LearningStyle | str) -> str:
    """Render a level's content block for the given style."""
    return get_content_renderer(style).render(level)


def fraction_readout(numerator: int, denominator: int) -> str:
    """Text for the kinesthetic fraction slider, e.g. '1/4 = 0.25'."""
    if denominator <= 0:
        return f"{numerator}/{denominator}"
    return f"{numerator}/{denominator} = {numerator / denominator:.2f}"
