import logging
import subprocess

logger = logging.getLogger(__name__)

DUMP_ARGS = ["show", "all", "dump"]
SHOW_ARGS = ["show"]


class CommandFailure(RuntimeError):
    """
    Ошибка запуска wg: процесс не стартовал, завершился с ненулевым кодом
    или не уложился в таймаут. В output лежит то, что успели прочитать.
    """

    def __init__(self, cause, binary: str, command: list[str], output: bytes = b""):
        self.cause = cause
        self.binary = binary
        self.command = command
        self.output = output or b""
        super().__init__(f"error running wg: {cause} ({binary} {command})")


def build_command(
    binary: str,
    args: list[str],
    use_sudo: bool = False,
    container: str = "",
    docker_bin: str = "docker",
) -> list[str]:
    """
    Формирует argv: [sudo] [docker exec -i контейнер] wg <args>.
    """
    cmd = [binary, *args]
    if container:
        cmd = [docker_bin, "exec", "-i", container, *cmd]
    if use_sudo:
        cmd = ["sudo", *cmd]
    return cmd


def run_wg(
    binary: str,
    timeout: float,
    use_sudo: bool = False,
    args: list[str] | None = None,
    container: str = "",
    docker_bin: str = "docker",
) -> bytes:
    """
    Запускает wg и возвращает stdout целиком (байты).
    При таймауте subprocess.run сам убивает процесс.
    """
    args = list(DUMP_ARGS if args is None else args)
    cmd = build_command(binary, args, use_sudo, container, docker_bin)
    logger.debug("CMD: %s", " ".join(cmd))

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
            check=True,
        )
    except subprocess.TimeoutExpired as e:
        logger.warning("wg timed out after %ss", timeout)
        raise CommandFailure(
            f"timed out after {timeout}s", binary, cmd, e.output
        ) from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or b"").decode("utf-8", errors="replace").strip()
        logger.warning("wg exit code %s: %s", e.returncode, stderr or "no stderr")
        cause = f"exit status {e.returncode}"
        if stderr:
            cause = f"{cause}: {stderr}"
        raise CommandFailure(cause, binary, cmd, e.output) from e
    except OSError as e:
        logger.warning("wg failed to start: %s", e)
        raise CommandFailure(e, binary, cmd) from e

    return result.stdout
