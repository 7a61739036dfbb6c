"""Decision engine: pot economics, scoring, texture, confidence and leaks."""

from poker_analyzer.analysis.analyzer import PokerAnalyzer, QuickAnalysis, analyze, quick_analysis
from poker_analyzer.analysis.leak_detector import LeakDetector
from poker_analyzer.analysis.texture import analyze_board_texture

__all__ = [
    "PokerAnalyzer", "QuickAnalysis", "analyze", "quick_analysis",
    "LeakDetector", "analyze_board_texture",
]
