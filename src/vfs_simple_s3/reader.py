import io


class RangeReader(io.RawIOBase):
    """Seekable, read-only view of an S3 object using ranged GETs."""

    def __init__(self, client, path, size):
        super().__init__()
        self._client = client
        self.path = path
        self._size = size
        self._pos = 0

    def readable(self):
        return True

    def seekable(self):
        return True

    def tell(self):
        return self._pos

    def seek(self, offset, whence=io.SEEK_SET):
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self._size + offset
        else:
            raise ValueError(f"invalid whence ({whence})")
        if pos < 0:
            raise ValueError(f"negative seek position {pos}")
        self._pos = pos
        return pos

    def readinto(self, buffer):
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if self._pos >= self._size or len(buffer) == 0:
            return 0
        end = min(self._pos + len(buffer), self._size) - 1
        data = self._client.get_object_range(
            self.path.container, self.path.key, self._pos, end
        )
        n = len(data)
        buffer[:n] = data
        self._pos += n
        return n

    def __len__(self):
        return self._size
