import os
import subprocess
import sys

import numpy as np
from PIL import Image

from labmap import FeatureMap
from labmap.extract import summarize

from helpers import random_image

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def run_extract(*args):
    env = dict(os.environ)
    env['PYTHONPATH'] = ROOT + os.pathsep + env.get('PYTHONPATH', '')
    return subprocess.run([sys.executable, '-m', 'labmap.extract'] + list(args),
                          capture_output=True, text=True, env=env)


def test_summarize():
    fm = FeatureMap(rect_width=2, rect_height=2)
    fm.compute(np.full((10, 10), 4, np.uint8))
    lines = summarize(fm)
    assert 'Image size:      10x10' in lines
    assert 'Feature region:  5x5' in lines
    assert 'Distinct codes:  1' in lines
    assert lines[-1].split() == ['0xFF', '11111111', '100.0%']

def test_summarize_top():
    fm = FeatureMap(roi=(0, 0, 20, 20))
    fm.compute(random_image((30, 30), seed=1))
    lines = summarize(fm, top=3)
    assert 'Region:          0,0,20,20' in lines
    codes = lines[lines.index('Most common codes:')+1:]
    assert len(codes) == 3

def test_summarize_empty_region():
    fm = FeatureMap(rect_width=4, rect_height=4)
    fm.compute(np.zeros((12, 11), np.uint8))
    assert summarize(fm)[-1] == 'Feature region:  0x1'

def test_extract(tmp_path):
    path = str(tmp_path / 'image.png')
    Image.fromarray(random_image((40, 50), seed=2)).save(path)
    res = run_extract(path, '-r', '3x2', '-N', '2', '-n', '5')
    assert res.returncode == 0, res.stderr
    assert 'Image size:      50x40' in res.stdout
    assert 'Block size:      3x2 (3x3 blocks)' in res.stdout
    assert 'Feature region:  42x35' in res.stdout

def test_extract_geometry_and_region(tmp_path):
    from labmap import Geometry
    path = str(tmp_path / 'image.png')
    Image.fromarray(random_image((40, 50, 3), seed=3)).save(path)
    geometry = str(tmp_path / 'geometry.json')
    Geometry(2, 2).save(geometry)
    res = run_extract(path, '-c', geometry, '-R', '0,0,30,30')
    assert res.returncode == 0, res.stderr
    assert 'Block size:      2x2 (3x3 blocks)' in res.stdout
    assert 'Feature region:  25x25' in res.stdout
    assert 'grayscale' in res.stderr # color image was converted

def test_extract_usage_errors(tmp_path):
    path = str(tmp_path / 'image.png')
    Image.fromarray(random_image((10, 10), seed=4)).save(path)
    for args in ((), (str(tmp_path / 'missing.png'),), (path, '-r', '0'), (path, '-R', '1,2,3'),
                 (path, '-N', 'x'), (path, '-q'), (path, '-r', '11'), (path, '')):
        res = run_extract(*args)
        assert res.returncode == 1
        assert 'LAB Feature Map Extraction' in res.stderr
