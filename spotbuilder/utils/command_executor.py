import subprocess
from ..cli_logger import logger


class _FailedProcess:
    returncode = -1


def run_shell_command(command, stream_output=False, env=None, input_data=None, cwd=None):
    """
    Executes a command, with options for streaming output and providing input.

    Args:
        command (list): The command to execute as a list of strings.
        stream_output (bool): If True, streams the output in real-time.
        env (dict, optional): A dictionary of environment variables.
        input_data (str, optional): Data to be passed to the command's stdin.
        cwd (str, optional): The working directory for the command.

    Returns:
        If stream_output is True, returns a tuple (line generator, process).
        If stream_output is False, returns a tuple (stdout, stderr, return_code).
    """
    try:
        if stream_output:
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                bufsize=1,
                universal_newlines=True,
                env=env,
                cwd=cwd
            )

            def _generator():
                for line in process.stdout:
                    yield line
                process.communicate()
            return _generator(), process

        else:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                env=env,
                input=input_data,
                check=False,
                cwd=cwd
            )
            return result.stdout, result.stderr, result.returncode

    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        if stream_output:
            return iter([]), _FailedProcess()
        else:
            return "", str(e), -1
    except OSError as e:
        logger.error(f"Failed to run {command[0]}: {e}")
        if stream_output:
            return iter([]), _FailedProcess()
        else:
            return "", str(e), -1


def run_interactive_command(command, env=None, cwd=None):
    """Run a command attached to the current terminal and return its exit code.

    Used for full-screen programs (the player itself, tmux) whose output must
    not be captured.
    """
    try:
        return subprocess.run(command, env=env, cwd=cwd, check=False).returncode
    except FileNotFoundError as e:
        logger.error(f"Command not found: {e.filename}")
        return -1
    except OSError as e:
        logger.error(f"Failed to run {command[0]}: {e}")
        return -1
