"""FastAPI server setup and routes"""
import html
import time
import os
from typing import Optional
from fastapi import FastAPI, Response, HTTPException
from fastapi.responses import HTMLResponse, PlainTextResponse
from config import Config
from collectors.hadoop import HadoopJmxCollector
from collectors.jmx import JmxClient, JmxFetchError
from metrics.dedup import MetricNameRegistry
from metrics.registry import TranslatorRegistry
from metrics.exporters.prometheus import PrometheusExporter, CONTENT_TYPE
from logging_config import get_logger, log_scrape, log_error
from middleware.security import SecurityHeadersMiddleware, RequestLoggingMiddleware


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server for the Hadoop JMX exporter"""

    def __init__(self, config: Config, jmx_client: Optional[JmxClient] = None):
        self.config = config
        self.app = FastAPI(
            title="Hadoop JMX Exporter",
            version=config.service_version,
            docs_url=None,  # Disable docs for security
            redoc_url=None,  # Disable redoc for security
            openapi_url=None  # Disable OpenAPI schema for security
        )

        # Name registry lives as long as the server so suffixes stay stable across scrapes
        self.name_registry = MetricNameRegistry()
        self.translators = TranslatorRegistry(self.name_registry, config.region_server_beans)
        self.collector = HadoopJmxCollector(
            self.translators,
            jmx_client or JmxClient(timeout=config.request_timeout),
            max_workers=config.scrape_workers
        )
        self.exporter = PrometheusExporter()

        # Scrape state
        self.start_time = time.time()
        self.last_scrape_time = 0
        self.scrape_count = 0
        self.scrape_errors = 0

        self._setup_middleware()
        self._setup_routes()
        self._setup_events()

    def _setup_middleware(self):
        """Setup HTTP middleware"""
        # Add middleware in reverse order (last added is executed first)
        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

        self.app.add_middleware(SecurityHeadersMiddleware)

    def _setup_routes(self):
        """Setup FastAPI routes"""

        @self.app.get('/metrics', response_class=Response)
        async def get_metrics(target: Optional[str] = None, module: Optional[str] = None):
            """Scrape a Hadoop JMX endpoint and serve it in Prometheus format"""
            target_url = target or self.config.target_url
            if not target_url:
                raise HTTPException(status_code=400, detail="No target given and TARGET_URL is not configured")
            module_type = module or self.config.module_type

            try:
                content = await self.scrape(target_url, module_type)
            except JmxFetchError as e:
                return PlainTextResponse(f"# {e}\n", status_code=502)

            return Response(content, media_type=CONTENT_TYPE)

        @self.app.get('/health')
        def health_check():
            """Health check endpoint"""
            age = time.time() - self.last_scrape_time if self.last_scrape_time > 0 else None

            return {
                "status": "healthy",
                "last_scrape_seconds_ago": round(age, 1) if age is not None else None,
                "total_scrapes": self.scrape_count,
                "scrape_errors": self.scrape_errors
            }

        @self.app.get('/status')
        def get_status():
            """Detailed status information"""
            age = time.time() - self.last_scrape_time if self.last_scrape_time > 0 else None

            return {
                "service": {
                    "name": self.config.service_name,
                    "version": self.config.service_version,
                    "uptime_seconds": round(time.time() - self.start_time, 1),
                    "hostname": os.uname().nodename
                },
                "scrapes": {
                    "default_target": self.config.target_url or None,
                    "default_module": self.config.module_type or None,
                    "last_scrape_seconds_ago": round(age, 1) if age is not None else None,
                    "total_scrapes": self.scrape_count,
                    "scrape_errors": self.scrape_errors,
                    "success_rate": round((self.scrape_count - self.scrape_errors) / max(self.scrape_count, 1) * 100, 1)
                },
                "translators": self.translators.get_translator_status(),
                "metric_name_buckets": len(self.name_registry)
            }

        @self.app.get('/', response_class=HTMLResponse)
        def index():
            """Web interface"""
            return self._generate_html_interface()

    def _setup_events(self):
        """Setup FastAPI shutdown event"""

        @self.app.on_event("shutdown")
        async def shutdown_event():
            """Cleanup on shutdown"""
            logger.info("Shutting down Hadoop JMX exporter", event_type="server_shutdown")
            self.collector.cleanup()

    async def scrape(self, target_url: str, module_type: str = "") -> str:
        """Collect one target and render it as Prometheus text"""
        start_time = time.time()
        self.scrape_count += 1

        try:
            metrics = await self.collector.collect_async(target_url, module_type)
        except JmxFetchError as e:
            self.scrape_errors += 1
            logger.warning("JMX fetch failed", target=target_url, reason=e.reason, event_type="scrape_error")
            raise
        except Exception as e:
            self.scrape_errors += 1
            log_error(logger, e, {"component": "scrape", "target": target_url})
            raise

        content = self.exporter.export_metrics(metrics)
        self.last_scrape_time = time.time()
        log_scrape(logger, target_url, len(metrics), self.last_scrape_time - start_time)
        return content

    def _generate_html_interface(self) -> str:
        """Generate HTML interface"""
        identities = ''.join(f'<li>{html.escape(identity)}</li>' for identity in self.translators.list_identities())

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>Hadoop JMX Exporter</title>
            <style>
                body {{ font-family: Arial, sans-serif; margin: 40px; background-color: #f5f5f5; }}
                .container {{ max-width: 1200px; margin: 0 auto; background-color: white; padding: 20px; border-radius: 8px; }}
                .endpoint {{ margin: 10px 0; padding: 10px; background-color: #f8f9fa; border-radius: 4px; }}
                .endpoint a {{ text-decoration: none; color: #0066cc; font-weight: bold; }}
                .section {{ background-color: #e9ecef; padding: 15px; border-radius: 4px; margin: 20px 0; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h1>Hadoop JMX Exporter</h1>

                <h2>Available Endpoints:</h2>
                <div class="endpoint"><a href="/metrics">/metrics</a> - Prometheus metrics (?target=&amp;module=)</div>
                <div class="endpoint"><a href="/health">/health</a> - Health check</div>
                <div class="endpoint"><a href="/status">/status</a> - Status information</div>

                <h2>Configuration:</h2>
                <div class="section">
                    <ul>
                        <li><strong>Default target:</strong> {self.config.target_url or 'none'}</li>
                        <li><strong>Default module:</strong> {self.config.module_type or 'none'}</li>
                        <li><strong>Hostname:</strong> {os.uname().nodename}</li>
                    </ul>
                </div>

                <h2>Region server beans:</h2>
                <div class="section">
                    <ul>{identities}</ul>
                </div>
            </div>
        </body>
        </html>
        """

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
