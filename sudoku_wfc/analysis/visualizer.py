"""Charts for recorded search traces."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .trace import TraceStep


class TraceVisualizer:
    """
    Chart generator for a single search trace.
    
    Shows how the trail grows and shrinks over the run and how quickly
    cells get resolved.
    """
    
    COLORS = {
        "push": "#2ecc71",      # Green
        "pop": "#e74c3c",       # Red
        "unresolved": "#3498db" # Blue
    }
    
    def __init__(self, steps: List[TraceStep], output_dir: str = "results"):
        """
        Initialize the visualizer.
        
        Args:
            steps: Recorded trace steps.
            output_dir: Directory to save generated charts.
        """
        self.steps = steps
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)
        
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")
    
    def generate_all(self) -> List[str]:
        """
        Generate all charts.
        
        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_depth(),
            self.plot_unresolved(),
        ]
    
    def plot_depth(self) -> str:
        """Trail depth per step, with backtracking steps marked."""
        fig, ax = plt.subplots(figsize=(12, 5))
        
        x = np.array([s.step for s in self.steps])
        depth = np.array([s.depth for s in self.steps])
        pops = np.array([s.outcome == "pop" for s in self.steps], dtype=bool)
        
        ax.plot(x, depth, color=self.COLORS["push"], linewidth=1.2, label="Trail depth")
        if pops.any():
            ax.scatter(x[pops], depth[pops], color=self.COLORS["pop"], s=12,
                       zorder=3, label="Backtrack")
        
        ax.set_xlabel('Step', fontsize=12)
        ax.set_ylabel('Trail depth', fontsize=12)
        ax.set_title('Search Depth over Time', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        ax.legend()
        
        plt.tight_layout()
        path = os.path.join(self.output_dir, "trace_depth.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        
        return path
    
    def plot_unresolved(self) -> str:
        """Cells still holding candidates after each step."""
        fig, ax = plt.subplots(figsize=(12, 5))
        
        x = [s.step for s in self.steps]
        unresolved = [s.unresolved for s in self.steps]
        
        ax.fill_between(x, unresolved, color=self.COLORS["unresolved"], alpha=0.3)
        ax.plot(x, unresolved, color=self.COLORS["unresolved"], linewidth=1.2)
        
        ax.set_xlabel('Step', fontsize=12)
        ax.set_ylabel('Unresolved cells', fontsize=12)
        ax.set_title('Unresolved Cells over Time', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)
        
        plt.tight_layout()
        path = os.path.join(self.output_dir, "trace_unresolved.png")
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        
        return path
