import os
import sys

here = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, here)                   # for helpers
sys.path.insert(0, os.path.dirname(here))  # for labmap when not installed
