"""Core constants used across asset import modules.

This module centralizes annotation keys, labels, and file names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_OUTPUT_DIR = Path("assets/providers")
DEFAULT_TARGET_NAMESPACE = "openshift-cluster-api"
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
METADATA_FILE_NAME = "metadata.yaml"
ARTIFACT_FILE_SUFFIX = ".yaml"
ARTIFACT_FILE_MODE = 0o600
GITHUB_BASE_URL = "https://github.com"

CERT_MANAGER_INJECT_CA_ANNOTATION = "cert-manager.io/inject-ca-from"
SERVICE_CA_INJECT_BUNDLE_ANNOTATION = "service.beta.openshift.io/inject-cabundle"
SERVICE_CA_SERVING_SECRET_ANNOTATION = "service.beta.openshift.io/serving-cert-secret-name"

CLUSTERCTL_LABEL = "clusterctl.cluster.x-k8s.io"
CLUSTERCTL_PROVIDER_LABEL = "cluster.x-k8s.io/provider"
ARTIFACT_PROVIDER_NAME_LABEL = "provider-name"
ARTIFACT_PROVIDER_TYPE_LABEL = "provider-type"
ARTIFACT_METADATA_KEY = "metadata"
ARTIFACT_COMPONENTS_KEY = "components"

CRD_KIND = "CustomResourceDefinition"
MUTATING_WEBHOOK_KIND = "MutatingWebhookConfiguration"
VALIDATING_WEBHOOK_KIND = "ValidatingWebhookConfiguration"
SERVICE_KIND = "Service"
CERTIFICATE_KIND = "Certificate"
ISSUER_KIND = "Issuer"
NAMESPACE_KIND = "Namespace"
DEPLOYMENT_KIND = "Deployment"
CLUSTER_ROLE_KIND = "ClusterRole"
CLUSTER_ROLE_BINDING_KIND = "ClusterRoleBinding"
SERVICE_ACCOUNT_KIND = "ServiceAccount"

CA_INJECTION_KINDS = (CRD_KIND, MUTATING_WEBHOOK_KIND, VALIDATING_WEBHOOK_KIND)
CLUSTER_SCOPED_KINDS = (
    NAMESPACE_KIND,
    CRD_KIND,
    CLUSTER_ROLE_KIND,
    CLUSTER_ROLE_BINDING_KIND,
    MUTATING_WEBHOOK_KIND,
    VALIDATING_WEBHOOK_KIND,
)
