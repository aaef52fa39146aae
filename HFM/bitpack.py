class MalformedContainerError(ValueError):
    """Raised when a container runs out of bits or declares impossible sizes."""


class BitWriter:
    def __init__(self):
        self._buf = bytearray()
        self._cur = 0
        self._nbits = 0  # bits currently in _cur (0..7)
        self.bit_length = 0  # total bits written so far

    def write_bit(self, bit: int):
        self._cur = (self._cur << 1) | (bit & 1)
        self._nbits += 1
        self.bit_length += 1
        if self._nbits == 8:
            self._buf.append(self._cur)
            self._cur = 0
            self._nbits = 0

    def write_code(self, code: int, length: int):
        """Write 'length' bits of code (MSB-first). length == 0 writes nothing."""
        for i in range(length - 1, -1, -1):
            self.write_bit((code >> i) & 1)

    def write_bytes(self, data: bytes):
        for b in data:
            self.write_code(b, 8)

    def finish(self) -> bytes:
        """Pad remaining bits with zeros."""
        if self._nbits > 0:
            self._buf.append(self._cur << (8 - self._nbits))
            self._cur = 0
            self._nbits = 0
        return bytes(self._buf)


class BitReader:
    def __init__(self, data: bytes):
        self.data = data
        self.i = 0
        self.bit = 0  # bit index in current byte (0..7), MSB-first

    @property
    def position(self) -> int:
        return self.i * 8 + self.bit

    def bits_left(self) -> int:
        return len(self.data) * 8 - self.position

    def read_bit(self, what: str = "bitstream") -> int:
        if self.i >= len(self.data):
            raise MalformedContainerError(
                f"Malformed stream: unexpected end of data while reading {what} (bit {self.position})")
        b = (self.data[self.i] >> (7 - self.bit)) & 1
        self.bit += 1
        if self.bit == 8:
            self.bit = 0
            self.i += 1
        return b

    def read_code(self, length: int, what: str = "bitstream") -> int:
        """Read 'length' bits as an unsigned int (MSB-first)."""
        if length > self.bits_left():
            raise MalformedContainerError(
                f"Malformed stream: need {length} bits for {what}, only {self.bits_left()} left")
        v = 0
        for _ in range(length):
            v = (v << 1) | self.read_bit(what)
        return v

    def read_bytes(self, n: int, what: str = "bitstream") -> bytes:
        if n * 8 > self.bits_left():
            raise MalformedContainerError(
                f"Malformed stream: need {n} bytes for {what}, only {self.bits_left()} bits left")
        return bytes(self.read_code(8, what) for _ in range(n))
