"""
Local Assembled Binary (LAB) feature encoding.

Each output pixel looks at a 3x3 grid of non-overlapping rect_width x rect_height blocks whose
top-left block is anchored at the pixel. The center block is the 'white' block and the eight blocks
around it are the 'black' blocks. Every black block contributes one bit that is set when the white
block sum is greater than or equal to the black block sum, giving an 8-bit code:

    0x80  0x40  0x20
    0x10   --   0x08
    0x04  0x02  0x01

Ties set the bit. Classifiers trained on these codes depend on this exact layout and comparison.
"""

__all__ = ['NUM_RECT', 'NEIGHBORS', 'lab_features', 'lab_shape', 'lab_code']

NUM_RECT = 3

# (block row, block column, bit) for each black block, in the same order as the bits
NEIGHBORS = (
    (0, 0, 0x80), (0, 1, 0x40), (0, 2, 0x20),
    (1, 0, 0x10),               (1, 2, 0x08),
    (2, 0, 0x04), (2, 1, 0x02), (2, 2, 0x01),
)

def lab_shape(shape, rect_width, rect_height):
    """
    The number of output rows and columns whose entire 3x3 block neighborhood fits inside an image
    of the given shape. These are the entries `lab_features` fills in. Either may be 0 or negative
    when the neighborhood does not fit at all.
    """
    return shape[0] - NUM_RECT*rect_height + 1, shape[1] - NUM_RECT*rect_width + 1

def lab_code(sums):
    """
    Computes a single LAB code from a 3x3 sequence of block sums (indexed as sums[row][col]). This
    is the scalar form of `lab_features`.
    """
    white = sums[1][1]
    code = 0
    for r, c, bit in NEIGHBORS:
        if white >= sums[r][c]: code |= bit
    return code

def lab_features(rs, rect_width, rect_height, out=None, nthreads=1):
    """
    Computes the LAB codes from the block sums rs (as produced by `rect_sum`). The output is a
    uint8 array the same shape as rs and can be given with out to be filled in place. Only the
    top-left lab_shape() portion of the output is written, the rest of out is left as-is.
    """
    from numpy import empty, uint8, greater_equal, left_shift, bitwise_or
    from .utils import run_threads
    rw, rh = rect_width, rect_height
    if rw < 1 or rh < 1: raise ValueError('Invalid block size')
    if out is None: out = empty(rs.shape, uint8)
    elif out.shape != rs.shape or out.dtype != uint8: raise ValueError('Invalid output array')
    H, W = lab_shape(rs.shape, rw, rh)
    if H <= 0 or W <= 0: return out

    def rows(_, start, stop):
        dst = out[start:stop, :W]
        dst.fill(0)
        white = rs[start+rh:stop+rh, rw:rw+W]
        cmp = empty(dst.shape, bool) # INTERMEDIATE: (stop-start, W)
        for r, c, bit in NEIGHBORS:
            black = rs[start+r*rh:stop+r*rh, c*rw:c*rw+W]
            greater_equal(white, black, out=cmp)
            bitwise_or(dst, left_shift(cmp.view(uint8), bit.bit_length()-1), out=dst)

    run_threads(rows, H, 64, nthreads)
    return out
