#!/usr/bin/env python3
"""Main entry point for the Hadoop JMX exporter"""
import argparse
import sys
import uvicorn
from config import Config
from app.server import MetricsServer
from logging_config import setup_structured_logging, get_logger, log_server_startup, log_error


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line overrides for the environment configuration"""
    parser = argparse.ArgumentParser(description="Export Hadoop JMX metrics in Prometheus format")
    parser.add_argument("--target", help="Hadoop JMX URL scraped when a request has no ?target=")
    parser.add_argument("--module", help="Module type appended to metric prefixes")
    parser.add_argument("--port", type=int, help="Port to listen on")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    """Load configuration, letting command line flags win over the environment"""
    overrides = {}
    if args.target:
        overrides["target_url"] = args.target
    if args.module:
        overrides["module_type"] = args.module
    if args.port:
        overrides["metrics_port"] = args.port
    return Config(**overrides)


def main(argv=None):
    """Main application entry point"""
    try:
        config = build_config(parse_args(argv))

        setup_structured_logging(config)
        logger = get_logger(__name__)
        log_server_startup(logger, config)

        server = MetricsServer(config)

        uvicorn.run(
            server.get_app(),
            host=config.metrics_host,
            port=config.metrics_port,
            log_config=None  # We handle logging ourselves
        )

    except Exception as e:
        logger = get_logger(__name__)
        log_error(logger, e, {"component": "main", "phase": "startup"})
        sys.exit(1)


if __name__ == '__main__':
    main()
