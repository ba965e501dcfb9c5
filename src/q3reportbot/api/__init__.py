"""
High-level processing API for q3reportbot.
"""

from q3reportbot.api.pipeline import ReportPipeline, ProcessResult, render_report

__all__ = [
    'ReportPipeline',
    'ProcessResult',
    'render_report',
]
