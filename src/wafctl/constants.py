"""Shared constants for wafctl."""

from pathlib import Path

# Host-side layout (relative to the project root)
SITES_DIR = "sites"
CERTS_DIR = "certs"
LOG_DIR = "logs"
COMPOSE_FILE = "docker-compose.yml"
AUDIT_JSONL_NAME = "wafctl-audit.jsonl"

# Compose services
PROXY_SERVICE = "waf"
CERTBOT_SERVICE = "certbot"
COMPOSE_COMMAND = "docker-compose"
CRON_COMPOSE_COMMAND = "/usr/local/bin/docker-compose"

# Paths as seen from inside the containers
NGINX_SNIPPETS_DIR = Path("/etc/nginx/snippets")
NGINX_CERTS_DIR = Path("/etc/nginx/certs")
LETSENCRYPT_LIVE_DIR = Path("/etc/letsencrypt/live")
ACME_WEBROOT = "/var/www/certbot"

# Certbot
RSA_KEY_SIZE = 4096

# Daily 3AM reload so renewed certificates are picked up
CRON_SCHEDULE = "0 3 * * *"
