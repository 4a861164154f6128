"""Run the server with the loopback device: python -m webdriver_server --port 4444"""

from webdriver_server.backends import LoopbackHooks
from webdriver_server.cli import create_command, single_session_factory

main = create_command(single_session_factory(LoopbackHooks))

if __name__ == "__main__":
    main()
