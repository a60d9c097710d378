import os
import sys
from pathlib import Path

# No artificial thinking pause for the computer during tests
os.environ.setdefault("AI_DELAY_EASY", "0")
os.environ.setdefault("AI_DELAY_MEDIUM", "0")
os.environ.setdefault("AI_DELAY_HARD", "0")

sys.path.append(str(Path(__file__).resolve().parents[1]))
