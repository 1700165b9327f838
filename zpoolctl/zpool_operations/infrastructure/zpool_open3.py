"""
ZpoolEngine backed by the zpool(8) command line tool.
"""
from pathlib import Path
from typing import Any, Callable, List, Optional, TypeVar

from ..core.entities.properties import ZpoolProperties, ZpoolPropertiesWrite, to_zpool_value
from ..core.entities.topology import Topology
from ..core.entities.zpool import Zpool
from ..core.exceptions.error_classifier import classify_stderr, from_os_error, from_value_error
from ..core.exceptions.zpool_exceptions import PoolNotFoundError, UnclassifiedError, ZpoolError
from ..core.interfaces.command_executor import ICommandExecutor, CommandResult
from ..core.interfaces.logger_interface import ILogger
from ..core.interfaces.zpool_engine import ZpoolEngine, PathLike
from ..core.result import Result
from .command_executor import CommandExecutor
from .logging.structured_logger import ContextLogger
from .parsers.zpool_status import ZpoolStatusParser

T = TypeVar('T')

DEFAULT_ZPOOL_CMD = "zpool"
_NO_POOLS_TO_IMPORT = b"no pools available to import"


def _is_option_like(name: str) -> bool:
    """zpool would parse these as flags; no pool can be named this way."""
    return name.startswith("-")


class ZpoolOpen3(ZpoolEngine):
    """Runs zpool(8) as a subprocess for every unchecked primitive.

    Non-zero exits are classified from stderr; failures to launch the
    process are translated from the OSError.
    """

    def __init__(self,
                 cmd_name: Optional[str] = None,
                 executor: Optional[ICommandExecutor] = None,
                 logger: Optional[ILogger] = None):
        self.cmd_name = cmd_name or DEFAULT_ZPOOL_CMD
        self._executor = executor or CommandExecutor()
        self._logger = logger or ContextLogger(
            name="zpoolctl.zpool",
            context={"zpool_module": "zpool", "zpool_impl": "open3"}
        )
        self._logger.debug("Created zpool engine", {"cmd_name": self.cmd_name})

    def exists(self, name: str) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.success(False)
        result = self._run("list", "-H", "-o", "name", name)
        if result.os_error is not None:
            return Result.failure(from_os_error(result.os_error, self.cmd_name))
        return Result.success(result.returncode == 0)

    def create_unchecked(self,
                         name: str,
                         topology: Topology,
                         props: Optional[ZpoolPropertiesWrite] = None,
                         mount: Optional[PathLike] = None,
                         alt_root: Optional[PathLike] = None) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(UnclassifiedError(f"invalid pool name '{name}': must begin with a letter"))
        args = ["create"]
        if mount is not None:
            args.extend(["-m", str(mount)])
        if alt_root is not None:
            args.extend(["-R", str(alt_root)])
        if props is not None:
            args.extend(props.into_args())
        args.append(name)
        args.extend(topology.into_args())

        self._logger.info(f"Creating pool: {name}", {"pool": name, "topology": topology.into_args()})
        return self._run_mutation(*args)

    def destroy_unchecked(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        args = ["destroy"]
        if force:
            args.append("-f")
        args.append(name)

        self._logger.info(f"Destroying pool: {name} (force={force})", {"pool": name})
        return self._run_mutation(*args)

    def read_properties_unchecked(self, name: str) -> Result[ZpoolProperties, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        return self._run_parsed(
            ZpoolProperties.from_stdout,
            "get", "-p", "-H", "-o", "value", ",".join(ZpoolProperties.ZPOOL_NAMES), name
        )

    def set_unchecked(self, name: str, key: str, value: Any) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        encoded = to_zpool_value(value)
        self._logger.info(f"Setting {key}={encoded} on pool {name}", {"pool": name, "key": key})
        return self._run_mutation("set", f"{key}={encoded}", name)

    def export_unchecked(self, name: str, force: bool = False) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        args = ["export"]
        if force:
            args.append("-f")
        args.append(name)

        self._logger.info(f"Exporting pool: {name} (force={force})", {"pool": name})
        return self._run_mutation(*args)

    def status_unchecked(self, name: str) -> Result[Zpool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        return self._run_parsed(
            lambda stdout: ZpoolStatusParser.parse_one(stdout.decode("utf-8", errors="replace"), name),
            "status", "-v", "-P", name
        )

    def all(self) -> Result[List[Zpool], ZpoolError]:
        return self._run_parsed(self._parse_many, "status", "-v", "-P")

    def available(self) -> Result[List[Zpool], ZpoolError]:
        return self._list_importable("import")

    def available_in_dir(self, dir: PathLike) -> Result[List[Zpool], ZpoolError]:
        return self._list_importable("import", "-d", str(dir))

    def import_from_dir(self,
                        name: str,
                        dir: PathLike,
                        props: Optional[ZpoolPropertiesWrite] = None) -> Result[bool, ZpoolError]:
        if _is_option_like(name):
            return Result.failure(PoolNotFoundError(name))
        args = ["import", "-d", str(dir)]
        if props is not None:
            args.extend(props.import_args())
        args.append(name)

        self._logger.info(f"Importing pool: {name} from {dir}", {"pool": name, "dir": str(Path(dir))})
        return self._run_mutation(*args)

    def _list_importable(self, *args: str) -> Result[List[Zpool], ZpoolError]:
        result = self._run(*args)
        if result.os_error is None and result.returncode != 0 and _NO_POOLS_TO_IMPORT in result.stderr:
            return Result.success([])
        return self._to_result(result, self._parse_many)

    @staticmethod
    def _parse_many(stdout: bytes) -> List[Zpool]:
        return ZpoolStatusParser.parse(stdout.decode("utf-8", errors="replace"))

    def _run(self, *args: str) -> CommandResult:
        self._logger.debug(f"Running {self.cmd_name} {' '.join(args)}")
        return self._executor.execute(self.cmd_name, *args)

    def _run_mutation(self, *args: str) -> Result[bool, ZpoolError]:
        return self._to_result(self._run(*args), lambda _: True)

    def _run_parsed(self, parse: Callable[[bytes], T], *args: str) -> Result[T, ZpoolError]:
        return self._to_result(self._run(*args), parse)

    def _to_result(self, result: CommandResult, parse: Callable[[bytes], T]) -> Result[T, ZpoolError]:
        if result.success:
            try:
                return Result.success(parse(result.stdout))
            except ValueError as e:
                error = from_value_error(e)
        elif result.os_error is not None:
            error = from_os_error(result.os_error, self.cmd_name)
        else:
            error = classify_stderr(result.stderr)

        self._logger.warning(f"{self.cmd_name} failed: {error}", {"kind": error.kind.value})
        return Result.failure(error)
