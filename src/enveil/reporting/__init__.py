from .render import render_json, render_protect_results, render_text

__all__ = ["render_json", "render_protect_results", "render_text"]
