import json
import sys

import matplotlib.pyplot as plt
import numpy as np

# --- CONFIGURATION ---
DATA_FILE = sys.argv[1] if len(sys.argv) > 1 else 'odds_results.json'
OUT_FILE = 'graph_odds.png'


def load_results(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        print(f"Error: Could not find '{path}'. Run scripts/odds_report.py --out {path} first.")
        sys.exit(1)
    print(f"Successfully loaded {len(data)} results from {path}.")
    return data


def plot_outcomes(data):
    names = [row['name'] for row in data]
    win = np.array([row['win'] for row in data])
    tie = np.array([row['tie'] for row in data])
    lose = np.array([row['lose'] for row in data])
    x = np.arange(len(names))

    plt.figure(figsize=(10, 6))
    plt.bar(x, win, color='#2ca02c', label='Win')
    plt.bar(x, tie, bottom=win, color='#ff7f0e', label='Tie')
    plt.bar(x, lose, bottom=win + tie, color='#d62728', label='Lose')

    for i, w in enumerate(win):
        plt.text(x[i], w / 2, f"{w:.1f}%", ha='center', va='center', color='white', fontweight='bold')

    plt.xticks(x, names, rotation=15, ha='right')
    plt.ylim(0, 100)
    plt.title('Win / Tie / Lose by Scenario', fontsize=14, fontweight='bold')
    plt.ylabel('Percent of simulations', fontsize=12)
    plt.legend()
    plt.grid(True, axis='y', alpha=0.3)
    plt.tight_layout()
    plt.savefig(OUT_FILE, dpi=300)
    print(f"Saved '{OUT_FILE}'")
    plt.show()


if __name__ == "__main__":
    plot_outcomes(load_results(DATA_FILE))
