"""Generating a Dockerfile from a build plan."""

from __future__ import annotations

from dataclasses import dataclass

from coolpack.dockerfile import (
    apt_install,
    build_args,
    build_cache_mount,
    cache_mount,
    copy_package_files,
    format_cmd_command,
    is_spa,
    package_manager_install,
    server_copy_statements,
    static_output_dir,
)
from coolpack.plan import Plan

DEFAULT_NODE_VERSION = "24"

_NON_ROOT_USER_DEBIAN = (
    "RUN addgroup --system --gid 1001 coolgroup && \\\n"
    "    adduser --system --uid 1001 --ingroup coolgroup cooluser\n\n"
)

_NON_ROOT_USER_ALPINE = (
    "RUN addgroup --system --gid 1001 coolgroup && \\\n"
    "    adduser --system --uid 1001 -G coolgroup cooluser\n\n"
)

_CADDY_SPA_CONFIG = (
    "# SPA routing: serve index.html for all routes\n"
    "RUN printf '%s\\n' ':80 {' '    root * /srv' '    try_files {path} /index.html'"
    " '    file_server' '}' > /etc/caddy/Caddyfile\n\n"
)

_NGINX_SETUP = (
    "RUN addgroup --system --gid 1001 coolgroup && \\\n"
    "    adduser --system --uid 1001 -G coolgroup cooluser && \\\n"
    "    apk add --no-cache libcap && \\\n"
    "    setcap 'cap_net_bind_service=+ep' /usr/sbin/nginx && \\\n"
    "    sed -i '/user  nginx;/d' /etc/nginx/nginx.conf && \\\n"
    "    chown -R cooluser:coolgroup /usr/share/nginx/html && \\\n"
    "    chown -R cooluser:coolgroup /var/cache/nginx && \\\n"
    "    chown -R cooluser:coolgroup /var/log/nginx && \\\n"
    "    touch /var/run/nginx.pid && \\\n"
    "    chown cooluser:coolgroup /var/run/nginx.pid\n\n"
)

_NGINX_SPA_CONFIG = (
    "# SPA routing: serve index.html for all routes\n"
    "RUN echo 'server { \\\n"
    "    listen 80; \\\n"
    "    root /usr/share/nginx/html; \\\n"
    "    index index.html; \\\n"
    "    location / { \\\n"
    "        try_files $uri $uri/ /index.html; \\\n"
    "    } \\\n"
    "}' > /etc/nginx/conf.d/default.conf\n\n"
)


class UnsupportedProviderError(ValueError):
    """Raised when no Dockerfile template exists for a plan's provider."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"unsupported provider: {provider}")
        self.provider = provider


@dataclass
class Generator:
    """Produces build files for a plan."""

    plan: Plan

    def generate_dockerfile(self) -> str:
        """Return the Dockerfile text for the plan."""
        if self.plan.provider == "node":
            return self._node_dockerfile()
        raise UnsupportedProviderError(self.plan.provider)

    def _node_dockerfile(self) -> str:
        plan = self.plan
        output_type = plan.metadata.get("output_type")
        if not isinstance(output_type, str):
            output_type = "server"
        base_image = self._base_image()
        header = (
            "# syntax=docker/dockerfile:1\n"
            "# Generated by Coolpack\n"
            f"# Provider: {plan.provider}, Framework: {plan.framework}, Output: {output_type}\n\n"
        )
        if output_type == "static":
            body = self._static_dockerfile(base_image)
        else:
            body = self._server_dockerfile(base_image)
        return header + body

    def _base_image(self) -> str:
        plan = self.plan
        custom = plan.metadata.get("base_image")
        if isinstance(custom, str) and custom:
            return custom
        if plan.package_manager == "bun":
            return f"oven/bun:{plan.package_manager_version or 'latest'}-slim"
        return f"node:{plan.language_version or DEFAULT_NODE_VERSION}-slim"

    def _package_manager(self) -> str:
        return self.plan.package_manager or "npm"

    def _builder_stage(self, base_image: str, pm: str) -> list[str]:
        plan = self.plan
        parts = [
            f"FROM {base_image} AS builder\n",
            "WORKDIR /app\n\n",
            apt_install(plan),
            build_args(plan),
            package_manager_install(plan, pm),
            copy_package_files(pm),
            f"RUN {cache_mount(plan, pm)}{plan.install_command}\n\n",
            "COPY . .\n\n",
        ]
        if plan.build_command:
            parts.append(f"RUN {build_cache_mount(plan)}{plan.build_command}\n\n")
        return parts

    def _server_dockerfile(self, base_image: str) -> str:
        plan = self.plan
        pm = self._package_manager()
        parts = self._builder_stage(base_image, pm)
        parts += [
            f"FROM {base_image} AS runner\n",
            "WORKDIR /app\n\n",
            package_manager_install(plan, pm),
            _NON_ROOT_USER_DEBIAN,
            "ENV NODE_ENV=production\n\n",
            server_copy_statements(plan),
            "RUN chown -R cooluser:coolgroup /app\n",
            "USER cooluser\n\n",
            "EXPOSE 3000\n\n",
        ]
        if plan.start_command:
            parts.append(f"CMD {format_cmd_command(plan.start_command)}\n")
        else:
            parts.append('CMD ["node", "index.js"]\n')
        return "".join(parts)

    def _static_dockerfile(self, base_image: str) -> str:
        parts = self._builder_stage(base_image, self._package_manager())
        server = self.plan.metadata.get("static_server")
        if not isinstance(server, str) or not server:
            server = "caddy"
        output_dir = static_output_dir(self.plan)
        if server == "nginx":
            parts.append(self._nginx_stage(output_dir))
        else:
            parts.append(self._caddy_stage(output_dir))
        return "".join(parts)

    def _caddy_stage(self, output_dir: str) -> str:
        spa = is_spa(self.plan)
        parts = [
            "FROM caddy:alpine AS runner\n\n",
            _NON_ROOT_USER_ALPINE,
            f"COPY --from=builder /app/{output_dir} /srv\n\n",
        ]
        if spa:
            parts.append(_CADDY_SPA_CONFIG)
        parts += [
            "RUN chown -R cooluser:coolgroup /srv\n\n",
            "USER cooluser\n\n",
            "EXPOSE 80\n\n",
        ]
        if spa:
            parts.append('CMD ["caddy", "run", "--config", "/etc/caddy/Caddyfile"]\n')
        else:
            parts.append('CMD ["caddy", "file-server", "--root", "/srv", "--listen", ":80"]\n')
        return "".join(parts)

    def _nginx_stage(self, output_dir: str) -> str:
        parts = [
            "FROM nginx:alpine AS runner\n\n",
            _NGINX_SETUP,
            f"COPY --from=builder /app/{output_dir} /usr/share/nginx/html\n\n",
        ]
        if is_spa(self.plan):
            parts.append(_NGINX_SPA_CONFIG)
        parts += [
            "USER cooluser\n\n",
            "EXPOSE 80\n\n",
            'CMD ["nginx", "-g", "daemon off;"]\n',
        ]
        return "".join(parts)