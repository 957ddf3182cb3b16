#!/usr/bin/env python3

import argparse
import logging
import sys

from pick import pick

from operadash import labels
from operadash.app.dashboard_app import DashboardApp
from operadash.configuration import DEFAULT_APP_PATH, DEFAULT_ENV_PATH, ConfigError, ConfigProvider
from operadash.dashboard.controller import NavigationController
from operadash.dashboard.messaging import MessageBus, TaskRunner
from operadash.logger import Logger, null_logger

log = Logger().setup_logger()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='operadash', description=labels.CLI_DESCRIPTION)
    parser.add_argument('--env-config', default=DEFAULT_ENV_PATH, help='Environment file (default: %(default)s)')
    parser.add_argument('--app-config', default=DEFAULT_APP_PATH, help='Table definition file (default: %(default)s)')
    parser.add_argument('--env', default='', help='Environment to connect to')
    parser.add_argument('--pick-env', action='store_true', help='Choose the environment from a list before starting')
    parser.add_argument('--debug', action='store_true', help='Write navigation debug output to the log file')
    return parser.parse_args(argv)


def choose_environment(config: ConfigProvider, requested: str, force_pick: bool) -> str:
    names = config.environment_names
    if requested in names and not force_pick:
        return requested
    if config.active in names and not force_pick and not requested:
        return config.active
    if len(names) == 1 and not force_pick:
        return names[0]
    selected_option, _ = pick(names, labels.CLI_PICK_ENV_TITLE)
    return str(selected_option)


def main(argv=None) -> int:
    args = parse_args(argv)
    log.info(labels.APP_STARTING)

    try:
        config = ConfigProvider.load(args.env_config, args.app_config)
    except ConfigError as e:
        print(labels.CLI_CONFIG_ERROR.format(e), file=sys.stderr)
        print(labels.CLI_CONFIG_HINT.format(args.env_config, args.app_config), file=sys.stderr)
        return 1

    if not config.environment_names:
        print(labels.CLI_NO_ENVIRONMENTS.format(args.env_config), file=sys.stderr)
        return 1

    try:
        env_name = choose_environment(config, args.env, args.pick_env)
    except KeyboardInterrupt:
        return 1

    if args.debug:
        nav_log = Logger().setup_logger('Navigation', level=logging.DEBUG)
    else:
        nav_log = null_logger()

    runner = TaskRunner(MessageBus())
    controller = NavigationController(config, runner, log=nav_log, env_name=env_name)
    DashboardApp(controller).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
