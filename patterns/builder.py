"""
Builder pattern for step-by-step object construction.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from utils.logging_config import get_logger
from utils.exceptions import ValidationError
from validation.validators import validate_positive
from .factory import register_example

logger = get_logger(__name__)


class Builder(ABC):
    """Abstract builder base class."""

    @abstractmethod
    def reset(self):
        """Reset the builder."""
        pass

    @abstractmethod
    def build(self) -> Any:
        """Build and return the final product."""
        pass


@dataclass(frozen=True)
class Computer:
    cpu: str
    memory_gb: int
    storage: Tuple[str, ...] = ()
    gpu: Optional[str] = None

    def describe(self) -> str:
        parts = [f"cpu={self.cpu}", f"memory={self.memory_gb} GB"]
        if self.storage:
            parts.append(f"storage={' + '.join(self.storage)}")
        if self.gpu:
            parts.append(f"gpu={self.gpu}")
        return ', '.join(parts)


class ComputerBuilder(Builder):
    """Fluent builder for ``Computer``; ``build`` resets it for the next one."""

    DEFAULT_MEMORY_GB = 8

    def __init__(self):
        self.reset()
        self.logger = get_logger(self.__class__.__name__)

    def reset(self):
        self._cpu: Optional[str] = None
        self._memory_gb = self.DEFAULT_MEMORY_GB
        self._storage: List[str] = []
        self._gpu: Optional[str] = None

    def set_cpu(self, cpu: str):
        self._cpu = cpu
        return self

    def set_memory(self, gigabytes: int):
        self._memory_gb = validate_positive(gigabytes, name='memory_gb')
        return self

    def add_storage(self, drive: str):
        self._storage.append(drive)
        self.logger.debug(f"Added storage: {drive}")
        return self

    def set_gpu(self, gpu: str):
        self._gpu = gpu
        return self

    def build(self) -> Computer:
        if not self._cpu:
            raise ValidationError("A computer needs a CPU", details={'missing': 'cpu'})

        computer = Computer(
            cpu=self._cpu,
            memory_gb=self._memory_gb,
            storage=tuple(self._storage),
            gpu=self._gpu
        )
        self.logger.debug(f"Built computer with {len(computer.storage)} drives")
        self.reset()
        return computer


class ComputerAssembler:
    """Director: knows the recipes, the builder knows the steps."""

    def __init__(self, builder: ComputerBuilder):
        self.builder = builder

    def office(self) -> Computer:
        return (
            self.builder
            .set_cpu('Intel Core i5')
            .set_memory(16)
            .add_storage('512 GB SSD')
            .build()
        )

    def gaming(self) -> Computer:
        return (
            self.builder
            .set_cpu('AMD Ryzen 9')
            .set_memory(32)
            .add_storage('1 TB NVMe')
            .add_storage('2 TB HDD')
            .set_gpu('RTX 4080')
            .build()
        )


@register_example('builder')
def builder_example() -> List[str]:
    builder = ComputerBuilder()
    assembler = ComputerAssembler(builder)

    lines = [
        f"Office PC: {assembler.office().describe()}",
        f"Gaming PC: {assembler.gaming().describe()}",
        f"Custom PC: {builder.set_cpu('ARM Cortex-A76').build().describe()}",
    ]

    try:
        builder.build()
    except ValidationError as e:
        lines.append(f"Empty build rejected: {e.message}")

    return lines
