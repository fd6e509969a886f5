"""Pipeline orchestration for project-wide usage analysis."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .config import InsightConfig, load_config
from .logging import get_logger, project_logger
from .models import AnalysisError, ComponentManifest, ComponentUsage, Dependency, FileMeta, VueComponent
from .parser.channels import get_dependency_with_used_channels_analysis
from .parser.component import extract_template, parse_component_file
from .parser.imports import find_component_imports, resolve_import
from .report import ProjectReport
from .repo_scanner import ComponentScanner
from .stores import ComponentCache


class Orchestrator:
    """Coordinates scanning, interface extraction and usage analysis."""

    def __init__(self, scanner: ComponentScanner | None = None, *, use_cache: bool = True) -> None:
        self.scanner = scanner or ComponentScanner()
        self.use_cache = use_cache
        self.logger = get_logger("orchestrator")

    def analyze_template(self, template: str, component: VueComponent) -> Dependency:
        """Report which members of ``component`` the given markup uses."""
        return get_dependency_with_used_channels_analysis(template, component)

    def run_analysis(self, path: str) -> ProjectReport:
        """Analyze every component of the project rooted at ``path``."""
        return asyncio.run(self.run_analysis_async(path))

    async def run_analysis_async(self, path: str) -> ProjectReport:
        root = Path(path).expanduser().resolve()
        self.logger = project_logger("orchestrator", root)
        self.logger.info("Starting usage analysis for %s", root)

        config = load_config(root)
        manifest = self.scanner.scan(str(root), config)
        self.logger.debug("Scanner discovered %d component files", len(manifest.files))

        cache = ComponentCache.for_project(root) if self.use_cache and config.cache else ComponentCache(None)
        components, errors = await self._parse_components(manifest, cache, config.concurrency)
        cache.prune(meta.path for meta in manifest.files)
        cache.persist()

        usages: List[ComponentUsage] = []
        for meta in manifest.files:
            parent = components.get(meta.path)
            if parent is None:
                continue
            try:
                usage = self._analyze_parent(root, meta, parent, components, config)
            except Exception as exc:
                self.logger.error("Usage analysis failed for %s: %s", meta.path, exc)
                errors.append(AnalysisError(path=meta.path, message=f"usage analysis failed: {exc}"))
                continue
            usages.append(usage)

        self.logger.info(
            "Analyzed %d components (%d errors)", len(components), len(errors)
        )
        return ProjectReport(root=str(root), components=components, usages=usages, errors=errors)

    # ------------------------------------------------------------------
    # Internal helpers

    async def _parse_components(
        self, manifest: ComponentManifest, cache: ComponentCache, concurrency: int
    ) -> Tuple[Dict[str, VueComponent], List[AnalysisError]]:
        semaphore = asyncio.Semaphore(max(1, concurrency))
        root = Path(manifest.root)

        async def _parse(meta: FileMeta) -> Optional[VueComponent]:
            cached = cache.get(meta.path, fingerprint=meta.hash)
            if cached is not None:
                self.logger.debug("Using cached interface for %s", meta.path)
                return cached
            async with semaphore:
                component = await parse_component_file(root / meta.path, full_path=meta.path)
            if component is not None:
                cache.store(meta.path, fingerprint=meta.hash, component=component)
            return component

        results = await asyncio.gather(*(_parse(meta) for meta in manifest.files))

        components: Dict[str, VueComponent] = {}
        errors: List[AnalysisError] = []
        for meta, component in zip(manifest.files, results):
            if component is None:
                errors.append(AnalysisError(path=meta.path, message="could not parse component interface"))
            else:
                components[meta.path] = component
        return components, errors

    def _analyze_parent(
        self,
        root: Path,
        meta: FileMeta,
        parent: VueComponent,
        components: Dict[str, VueComponent],
        config: InsightConfig,
    ) -> ComponentUsage:
        source = (root / meta.path).read_text(encoding="utf-8")
        usage = ComponentUsage(name=parent.name, full_path=parent.full_path)
        template = extract_template(source)
        if template is None:
            return usage

        for component_import in find_component_imports(source, config.extensions):
            resolved = resolve_import(
                component_import.specifier, root / meta.path, root, config.aliases
            )
            if resolved is None:
                self.logger.debug(
                    "Skipping unresolved import %s in %s", component_import.specifier, meta.path
                )
                continue
            dependency = components.get(resolved.relative_to(root).as_posix())
            if dependency is None:
                continue
            usage.dependencies.append(self.analyze_template(template, dependency))
        return usage
