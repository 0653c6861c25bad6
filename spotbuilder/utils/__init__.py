from .command_executor import run_shell_command, run_interactive_command
