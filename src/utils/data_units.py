from src.sim_params import SimParams as sparams

from src.utils.transmission import get_tx_time_s


class DataUnit:
    """Abstract base class for all data units in the simulation."""

    def __init__(self, size_bytes: int, src_id: int):
        """
        Initializes a DataUnit.

        Args:
            size_bytes (int): The size of the data unit in bytes.
            src_id (int): The source endpoint ID.
        """
        self.size_bytes: int = size_bytes

        self.src_id: int = src_id

        self.type: str | None = None  # Type of the data unit

    @property
    def size_bits(self) -> int:
        return self.size_bytes * 8

    def tx_time_s(self, bandwidth_MHz: float) -> float:
        """
        Returns the time (in seconds) it takes to send the data unit.

        Args:
            bandwidth_MHz (float): The channel bandwidth in MHz.
        """
        return get_tx_time_s(self.size_bytes, bandwidth_MHz)

    def __repr__(self):
        return f"size={self.size_bytes}, src_id={self.src_id}"


class Packet(DataUnit):
    def __init__(self, src_id: int, size_bytes: int = sparams.PACKET_SIZE_bytes):
        """
        Initializes a data Packet.

        Args:
            src_id (int): The source endpoint ID.
            size_bytes (int, optional): The size of the packet in bytes. Defaults to SimParams.PACKET_SIZE_bytes.
        """
        super().__init__(size_bytes, src_id)

        self.type: str = "DATA"

    def __repr__(self):
        return f"{self.__class__.__name__}({super().__repr__()})"


class CSIReport(DataUnit):
    def __init__(self, src_id: int, size_bytes: int = sparams.CSI_PACKET_SIZE_bytes):
        """
        Initializes a CSI (Channel State Information) report sent back during sounding.

        Args:
            src_id (int): The source endpoint ID.
            size_bytes (int, optional): The size of the report in bytes. Defaults to SimParams.CSI_PACKET_SIZE_bytes.
        """
        super().__init__(size_bytes, src_id)

        self.type: str = "CSI"

    def __repr__(self):
        return f"{self.__class__.__name__}({super().__repr__()})"
