"""
Name lookup for gardens, projects, seeds and shoots.

Garden names come from the configuration; everything below a garden is
listed from the garden cluster's Gardener API.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from gardenctl.config import Garden, GardenctlConfig
from gardenctl.exceptions import LookupCancelled, LookupFailed, TargetNotFoundError, ValidationError

if TYPE_CHECKING:
    from gardenctl.modules.target.models import Target

logger = logging.getLogger("gardenctl.lookup")

GARDENER_GROUP = "core.gardener.cloud"
GARDENER_VERSION = "v1beta1"


class LookupContext:
    """Cancellation and timeout shared by all lookups of one invocation."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout else None

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return True
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def check(self) -> None:
        """Raise LookupCancelled once the context is cancelled or expired."""
        if self.cancelled:
            raise LookupCancelled("Lookup cancelled before it completed")


class NameLookup(ABC):
    """Lists the valid names one level below a (partial) target."""

    @abstractmethod
    def garden_names(self) -> List[str]:
        ...

    @abstractmethod
    def project_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        ...

    @abstractmethod
    def seed_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        ...

    @abstractmethod
    def shoot_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        ...

    @abstractmethod
    def locate_shoot(self, ctx: LookupContext, target: "Target", shoot_name: str) -> str:
        """Return the name of the project that owns ``shoot_name``."""
        ...


class KubernetesNameLookup(NameLookup):
    """Lookup backed by the Gardener custom resources of each garden."""

    def __init__(self, gardenctl_config: GardenctlConfig):
        self.config = gardenctl_config

    def garden_names(self) -> List[str]:
        return self.config.garden_names()

    def project_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        with self._custom_objects_api(target) as api:
            projects = self._list(ctx, api, "projects")
        return [item["metadata"]["name"] for item in projects]

    def seed_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        with self._custom_objects_api(target) as api:
            seeds = self._list(ctx, api, "seeds")
        return [item["metadata"]["name"] for item in seeds]

    def shoot_names(self, ctx: LookupContext, target: "Target") -> List[str]:
        with self._custom_objects_api(target) as api:
            if target.project_name:
                namespace = self._project_namespace(ctx, api, target.project_name)
                shoots = self._list(ctx, api, "shoots", namespace=namespace)
            elif target.seed_name:
                shoots = self._list(ctx, api, "shoots", field_selector=f"spec.seedName={target.seed_name}")
            else:
                shoots = self._list(ctx, api, "shoots")

        return [item["metadata"]["name"] for item in shoots]

    def locate_shoot(self, ctx: LookupContext, target: "Target", shoot_name: str) -> str:
        with self._custom_objects_api(target) as api:
            shoots = self._list(ctx, api, "shoots", field_selector=f"metadata.name={shoot_name}")
            if not shoots:
                raise TargetNotFoundError("shoot", shoot_name)

            namespaces = sorted({item["metadata"]["namespace"] for item in shoots})
            if len(namespaces) > 1:
                raise ValidationError(
                    f"shoot '{shoot_name}' exists in multiple projects",
                    hint="Target a project or seed first",
                )

            projects = self._list(ctx, api, "projects")

        for project in projects:
            if self._namespace_of(project) == namespaces[0]:
                return project["metadata"]["name"]
        raise TargetNotFoundError("project for shoot", shoot_name)

    @contextmanager
    def _custom_objects_api(self, target: "Target") -> Iterator[client.CustomObjectsApi]:
        if not target.garden_name:
            raise ValidationError("no garden targeted", hint="Target a garden first: gardenctl target garden <name>")

        garden = self.config.find_garden(target.garden_name)
        if garden is None:
            raise TargetNotFoundError("garden", target.garden_name)

        api_client = self._api_client(garden)
        try:
            yield client.CustomObjectsApi(api_client)
        finally:
            api_client.close()

    def _api_client(self, garden: Garden) -> client.ApiClient:
        try:
            return config.new_client_from_config(config_file=garden.kubeconfig, context=garden.context)
        except (ConfigException, OSError) as e:
            raise LookupFailed(f"Failed to load kubeconfig for garden '{garden.name}': {e}") from e

    def _project_namespace(self, ctx: LookupContext, api: client.CustomObjectsApi, project_name: str) -> str:
        ctx.check()
        try:
            project = api.get_cluster_custom_object(
                group=GARDENER_GROUP,
                version=GARDENER_VERSION,
                plural="projects",
                name=project_name,
                _request_timeout=ctx.remaining(),
            )
        except ApiException as e:
            raise self._translate(e, "project", TargetNotFoundError("project", project_name)) from e
        except HTTPError as e:
            raise LookupFailed(f"Failed to get project '{project_name}': {e}") from e
        return self._namespace_of(project)

    @staticmethod
    def _namespace_of(project: Dict[str, Any]) -> str:
        return project.get("spec", {}).get("namespace") or f"garden-{project['metadata']['name']}"

    def _list(
        self,
        ctx: LookupContext,
        api: client.CustomObjectsApi,
        plural: str,
        namespace: Optional[str] = None,
        field_selector: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        ctx.check()
        kwargs: Dict[str, Any] = {"_request_timeout": ctx.remaining()}
        if field_selector:
            kwargs["field_selector"] = field_selector

        try:
            if namespace:
                result = api.list_namespaced_custom_object(
                    group=GARDENER_GROUP,
                    version=GARDENER_VERSION,
                    namespace=namespace,
                    plural=plural,
                    **kwargs
                )
            else:
                # for namespaced kinds this lists across all namespaces
                result = api.list_cluster_custom_object(
                    group=GARDENER_GROUP,
                    version=GARDENER_VERSION,
                    plural=plural,
                    **kwargs
                )
        except ApiException as e:
            if namespace:
                not_found: Exception = TargetNotFoundError("project namespace", namespace)
            else:
                not_found = LookupFailed(
                    f"Gardener {plural} are not served by garden cluster",
                    hint="Check that the kubeconfig points to a garden cluster",
                )
            raise self._translate(e, plural, not_found) from e
        except HTTPError as e:
            raise LookupFailed(f"Failed to list {plural}: {e}") from e

        # the request may have outlived a cancellation
        ctx.check()
        items = result.get("items", [])
        logger.debug(f"Listed {len(items)} {plural}")
        return items

    @staticmethod
    def _translate(e: ApiException, kind: str, not_found: Exception) -> Exception:
        if e.status == 404:
            return not_found
        if e.status in (401, 403):
            return LookupFailed(f"Access denied while listing {kind}: {e.reason}", hint="Check your garden kubeconfig")
        return LookupFailed(f"Failed to list {kind}: {e.status} {e.reason}")
