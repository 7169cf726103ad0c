"""
Icon Sizes - The list of edge lengths an ICO file should contain

The default set is the bare minimum recommended for Windows app icons:
16, 24, 32, 48 and 256 pixels. See
https://learn.microsoft.com/en-us/windows/apps/design/style/iconography/app-icon-construction#icon-scaling
"""

from typing import Iterable, Iterator, Tuple, Union

from .errors import InvalidIconSizeError

# Largest edge a directory entry can describe (stored as 0).
MAX_ICON_SIZE = 256

# Bare minimum recommended set.
MINIMAL_SIZES = (16, 24, 32, 48, 256)


class IconSizes:
    """
    Immutable, ordered list of icon sizes.

    Order is kept as given and duplicates are allowed; each occurrence
    produces its own frame. Values are only checked by validate(), which
    the builder calls right before a build.
    """

    __slots__ = ("_sizes",)

    def __init__(self, sizes: Iterable[int] = ()):
        self._sizes: Tuple[int, ...] = tuple(sizes)

    @classmethod
    def default(cls) -> "IconSizes":
        """The minimal recommended set: 16, 24, 32, 48 and 256."""
        return cls(MINIMAL_SIZES)

    @classmethod
    def parse(cls, text: str) -> "IconSizes":
        """
        Parse a comma or whitespace separated list such as "16,32,48".

        Raises:
            InvalidIconSizeError: If an item is not an integer
        """
        items = text.replace(",", " ").split()
        sizes = []
        for item in items:
            try:
                sizes.append(int(item))
            except ValueError:
                raise InvalidIconSizeError(item) from None
        return cls(sizes)

    def validate(self) -> None:
        """
        Check that every size fits in an ICO directory entry.

        Raises:
            InvalidIconSizeError: For the first size outside 1..256
        """
        for size in self._sizes:
            if isinstance(size, bool) or not isinstance(size, int):
                raise InvalidIconSizeError(size)
            if size < 1 or size > MAX_ICON_SIZE:
                raise InvalidIconSizeError(size)

    def __iter__(self) -> Iterator[int]:
        return iter(self._sizes)

    def __len__(self) -> int:
        return len(self._sizes)

    def __getitem__(self, index: Union[int, slice]):
        return self._sizes[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, IconSizes):
            return self._sizes == other._sizes
        if isinstance(other, (tuple, list)):
            return self._sizes == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._sizes)

    def __repr__(self) -> str:
        return f"IconSizes({list(self._sizes)!r})"

