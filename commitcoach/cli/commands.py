"""CLI Commands"""

import os
import sys

from commitcoach import STYLE_NAMES
from commitcoach.config import Config, DEFAULT_SERVER, load_config, save_config, get_config_path
from commitcoach.output import bold, dim, info, print_success

ENV_OVERRIDES = ('COMMITCOACH_SERVER', 'COMMITCOACH_STYLE', 'COMMITCOACH_TIMEOUT')


def display_config() -> int:
    """Display current configuration."""
    config = load_config().apply_env(os.environ)
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .commitcoachrc found)")

    overrides = [name for name in ENV_OVERRIDES if os.environ.get(name)]
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for name in overrides:
            print(f"    {name}={os.environ[name]}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    server:   {info(config.server)}")
    print(f"    style:    {info(config.style)}")
    print(f"    timeout:  {info(str(config.timeout))}s")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .commitcoachrc (in current directory)")
    print(f"    Global: ~/.commitcoachrc")
    print(f"\n  {dim('Run')} commitcoach --setup {dim('to configure')}\n")

    return 0


def run_setup() -> int:
    """Quick setup wizard."""
    display_config()
    print(f"{bold('Setup Wizard')}\n")

    server = input(f"Proxy URL (Enter for {DEFAULT_SERVER}): ").strip() or DEFAULT_SERVER

    print("\nCommit message style:\n")
    for i, name in enumerate(STYLE_NAMES, 1):
        default = " (default)" if i == 1 else ""
        print(f"  {i}. {name}{default}")
    print()

    while True:
        choice = input(f"Select [1-{len(STYLE_NAMES)}] (Enter for default): ").strip()
        if choice == '':
            style = STYLE_NAMES[0]
            break
        if choice.isdigit() and 1 <= int(choice) <= len(STYLE_NAMES):
            style = STYLE_NAMES[int(choice) - 1]
            break

    print("\nRequest timeout in seconds (Enter for 60): ", end='')
    timeout_input = input().strip()
    timeout = int(timeout_input) if timeout_input.isdigit() and int(timeout_input) > 0 else 60

    config = Config.from_dict({"server": server, "style": style, "timeout": timeout})
    path = save_config(config, global_config=True)

    print_success(f"Saved to {path}")
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete commitcoach)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell commitcoach | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish commitcoach | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
