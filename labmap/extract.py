#!/usr/bin/env python3
"""
Computes the LAB feature map of an image and prints a summary of it. This is meant for checking the
block geometry against real images, nothing is saved.
"""

__all__ = ['summarize']

def summarize(fm, top=10):
    """
    Summarizes a computed FeatureMap as a list of lines: the image size, geometry, size of the
    region with LAB codes, and the most common codes with their frequencies.
    """
    from numpy import bincount, argsort
    g = fm.geometry
    H, W = fm.valid_shape
    lines = ["Image size:      %dx%d" % (fm.width, fm.height),
             "Block size:      %dx%d (%dx%d blocks)" % (g.rect_width, g.rect_height, g.num_rect, g.num_rect),
             "Feature region:  %dx%d" % (W, H)]
    if fm.roi is not None: lines.insert(1, "Region:          %d,%d,%d,%d" % fm.roi)
    if H == 0 or W == 0: return lines
    counts = bincount(fm.features.ravel(), minlength=256)
    total = H * W
    lines.append("Distinct codes:  %d" % (counts != 0).sum())
    lines.append("Most common codes:")
    for code in argsort(-counts, kind='stable')[:top].tolist():
        if counts[code] == 0: break
        lines.append("  0x%02X  %s  %5.1f%%" % (code, '{:08b}'.format(code), 100*counts[code]/total))
    return lines

def __extract_main():
    """The LAB extract command line program"""
    from PIL import Image
    from .featuremap import FeatureMap

    # Parse Arguments
    im_path, geometry, roi, nthreads, top = __extract_main_parse_args()

    # Load the image as 8-bit grayscale and process it
    with Image.open(im_path) as im:
        if im.mode != 'L':
            from warnings import warn
            warn('converting %s image to 8-bit grayscale' % im.mode)
            im = im.convert('L')
        from numpy import asarray
        im = asarray(im)
    fm = FeatureMap(geometry, roi=roi, nthreads=nthreads)
    try: fm.compute(im)
    except ValueError as err: __extract_usage(err)
    for line in summarize(fm, top): print(line)

def __extract_main_parse_args():
    """Parse the command line arguments for the LAB extract command line program."""
    #pylint: disable=too-many-branches
    import os.path
    from sys import argv
    from getopt import getopt, GetoptError
    from .geometry import Geometry, InvalidGeometryError

    # Parse and minimally check arguments
    if len(argv) < 2: __extract_usage()
    if len(argv) > 2 and not argv[2].startswith("-"):
        __extract_usage("You provided more than 1 required argument")

    # Check the input image
    im_path = argv[1]
    if not os.path.isfile(im_path): __extract_usage("Input image does not exist")

    # Get defaults for optional arguments
    geometry = Geometry()
    size = None
    roi = None
    nthreads = 1
    top = 10

    # Parse the optional arguments
    try: opts, _ = getopt(argv[2:], "hr:c:R:N:n:")
    except GetoptError as err: __extract_usage(err)
    for o, a in opts:
        if o == "-h": __extract_usage()
        elif o == "-r":
            try:
                if 'x' in a: W,H = [int(x,10) for x in a.split('x', 1)]
                else:        W = H = int(a,10)
            except ValueError: __extract_usage("Block size must be a positive integer or two positive integers seperated by an x")
            if W <= 0 or H <= 0: __extract_usage("Block size must be a positive integer or two positive integers seperated by an x")
            size = W,H
        elif o == "-c":
            try: geometry = Geometry.load(a)
            except (OSError, ValueError) as err: __extract_usage("Could not load geometry: %s" % err)
        elif o == "-R":
            try: roi = tuple(int(x,10) for x in a.split(','))
            except ValueError: __extract_usage("Region must be four non-negative integers seperated by commas")
            if len(roi) != 4 or any(x < 0 for x in roi) or roi[0] >= roi[2] or roi[1] >= roi[3]:
                __extract_usage("Region must be four non-negative integers seperated by commas")
        elif o == "-N":
            try: nthreads = int(a, 10)
            except ValueError: __extract_usage("Number of threads must be a positive integer")
            if nthreads <= 0: __extract_usage("Number of threads must be a positive integer")
        elif o == "-n":
            try: top = int(a, 10)
            except ValueError: __extract_usage("Number of codes must be a non-negative integer")
            if top < 0: __extract_usage("Number of codes must be a non-negative integer")
        else: __extract_usage("Invalid argument %s" % o)
    if size is not None:
        try: geometry = geometry.replace(rect_width=size[0], rect_height=size[1])
        except InvalidGeometryError as err: __extract_usage(err)

    return im_path, geometry, roi, nthreads, top

def __extract_usage(err=None):
    import sys
    if err is not None:
        print(err, file=sys.stderr)
        print(file=sys.stderr)
    from . import __version__
    print("""LAB Feature Map Extraction.  %s

%s <input> <optional arguments>
  input         The input image to read. Color images are converted to 8-bit
                grayscale.

Optional Arguments:
  -r block_size Set the block size to use as WxH or a single number for square
                blocks. Default is 1x1 or the size in the geometry file.
  -c geometry   A JSON geometry file with rect_width, rect_height and num_rect.
                A block size given with -r overrides the one in the file.
  -R T,L,B,R    Only process the given region of the image, given as top, left,
                bottom and right (the bottom and right are exclusive).
  -N nthreads   How many threads to use. Default is 1.
  -n ncodes     How many of the most common codes to list. Default is 10."""
          % (__version__, sys.argv[0]), file=sys.stderr)
    sys.exit(1)

if __name__ == "__main__":
    __extract_main()
