import numpy as np

import ndview

board = ndview.tensor(np.zeros((4, 4), dtype=np.int8), names=["y", "x"])

try:
    board[0] = 1
except ndview.UnsupportedMutationError as exc:
    print("refused:", exc)

stamp = ndview.tensor(np.ones((2, 2), dtype=np.int8))
stamped = ndview.put_slice(board, {"y": 1, "x": 3}, stamp)
print(stamped.to_numpy())
print("original untouched:", not board.to_numpy().any())
