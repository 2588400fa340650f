"""Decode muon detector hit files into JSON event trees and draw hit heatmaps."""

__version__ = "0.1.0"