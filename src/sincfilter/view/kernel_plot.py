from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.figure import Figure


def plot_kernel(
    offsets: npt.NDArray[np.float64],
    kernel: npt.NDArray[np.float64],
    title: str = "Filter Kernel",
    show: bool = True,
) -> Figure:
    """
    Plot the kernel coefficients against their tap offset.

    Args:
        offsets: Tap offsets -half_width..+half_width.
        kernel: Coefficients, same length as `offsets`.
        title: Figure title.
        show: Call `plt.show()` after drawing.

    Returns:
        The matplotlib figure.
    """
    if len(offsets) != len(kernel):
        raise ValueError(f"Got {len(offsets)} offsets for {len(kernel)} coefficients.")

    plt.rcParams["figure.constrained_layout.use"] = True
    fig = plt.figure(figsize=(7, 5))
    ax = fig.add_subplot(1, 1, 1)

    ax.plot(offsets, kernel, 'b', lw=2, marker='o', ms=3)

    ax.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
    ax.minorticks_on()
    ax.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

    ax.set_title(title)
    ax.set_xlabel("Time")
    ax.set_ylabel("")

    if show:
        plt.show()
    return fig
