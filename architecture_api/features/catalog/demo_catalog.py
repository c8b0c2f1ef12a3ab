"""
Demo catalog: a small banking landscape used when ARCHITECTURE_USE_MOCK_DATA is on.

- 3 domains (payments, banking-core, lending)
- 5 systems, each one bounded context
- 8 APIs (openapi + one grpc)
- 7 components wired together through providesApis/consumesApis
"""

from __future__ import annotations

from typing import Any

from context_discovery.catalog import load_catalog_entities
from context_discovery.snapshot import InMemorySnapshotAccessor

API_VERSION = "backstage.io/v1alpha1"
GITHUB_ORG = "mybank"

# name -> (title, description)
_DOMAINS = {
    "payments": ("Payments Domain", "Payment processing and transaction management"),
    "banking-core": ("Banking Core Domain", "Core banking operations - accounts, customers, transactions"),
    "lending": ("Lending Domain", "Loan origination and management"),
}

# name -> (title, description, owner, domain)
_SYSTEMS = {
    "payment-core": ("Payment Core Context", "Payment processing bounded context", "payments-squad", "payments"),
    "account-management": ("Account Management Context", "Account operations and balance management", "accounts-squad", "banking-core"),
    "customer-management": ("Customer Management Context", "Customer profile and KYC management", "customer-squad", "banking-core"),
    "loan-origination": ("Loan Origination Context", "Loan application and approval process", "lending-squad", "lending"),
    "transaction-processing": ("Transaction Processing Context", "Transaction history and reconciliation", "operations-squad", "banking-core"),
}

# name -> (title, description, type, system)
_APIS = {
    "payment-gateway-api": ("Payment Gateway API", "Process payment transactions", "openapi", "payment-core"),
    "payment-validation-api": ("Payment Validation API", "Validate payment requests", "openapi", "payment-core"),
    "account-api": ("Account API", "Account CRUD operations", "openapi", "account-management"),
    "balance-inquiry-api": ("Balance Inquiry API", "Check account balances", "openapi", "account-management"),
    "customer-api": ("Customer API", "Customer profile management", "openapi", "customer-management"),
    "kyc-verification-api": ("KYC Verification API", "Customer verification and KYC", "grpc", "customer-management"),
    "loan-application-api": ("Loan Application API", "Submit and manage loan applications", "openapi", "loan-origination"),
    "transaction-history-api": ("Transaction History API", "Query transaction history", "openapi", "transaction-processing"),
}

# name -> (title, system, providesApis, consumesApis)
_COMPONENTS = {
    "payment-gateway": (
        "Payment Gateway Service", "payment-core",
        ["payment-gateway-api"],
        ["account-api", "balance-inquiry-api", "transaction-history-api"],
    ),
    "payment-validator": ("Payment Validator Service", "payment-core", ["payment-validation-api"], []),
    "account-service": (
        "Account Service", "account-management",
        ["account-api", "balance-inquiry-api"],
        ["customer-api", "transaction-history-api"],
    ),
    "customer-service": ("Customer Service", "customer-management", ["customer-api"], []),
    "kyc-service": ("KYC Service", "customer-management", ["kyc-verification-api"], ["customer-api"]),
    "loan-application-service": (
        "Loan Application Service", "loan-origination",
        ["loan-application-api"],
        ["customer-api", "kyc-verification-api", "account-api"],
    ),
    "transaction-service": ("Transaction Service", "transaction-processing", ["transaction-history-api"], []),
}

_SYSTEM_OWNERS = {name: owner for name, (_, _, owner, _) in _SYSTEMS.items()}


def _descriptor(kind: str, name: str, title: str, description: str, spec: dict[str, Any], annotations: dict[str, str] | None = None) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "title": title, "description": description}
    if annotations:
        metadata["annotations"] = annotations
    return {"apiVersion": API_VERSION, "kind": kind, "metadata": metadata, "spec": spec}


def generate_demo_descriptors() -> list[dict[str, Any]]:
    """Backstage-style descriptors for the whole demo landscape."""
    descriptors: list[dict[str, Any]] = []

    for name, (title, description) in _DOMAINS.items():
        descriptors.append(_descriptor("Domain", name, title, description, {"owner": "platform-team"}))

    for name, (title, description, owner, domain) in _SYSTEMS.items():
        descriptors.append(_descriptor("System", name, title, description, {"owner": owner, "domain": domain}))

    for name, (title, description, api_type, system) in _APIS.items():
        descriptors.append(
            _descriptor(
                "API", name, title, description,
                {
                    "type": api_type,
                    "lifecycle": "production",
                    "owner": _SYSTEM_OWNERS[system],
                    "system": system,
                },
            )
        )

    for name, (title, system, provides, consumes) in _COMPONENTS.items():
        descriptors.append(
            _descriptor(
                "Component", name, title, f"{title} ({system})",
                {
                    "type": "service",
                    "lifecycle": "production",
                    "owner": _SYSTEM_OWNERS[system],
                    "system": system,
                    "providesApis": list(provides),
                    "consumesApis": list(consumes),
                },
                annotations={
                    "github.com/project-slug": f"{GITHUB_ORG}/{name}",
                    "backstage.io/source-location": f"url:https://github.com/{GITHUB_ORG}/{name}",
                },
            )
        )

    return descriptors


def demo_snapshot_accessor() -> InMemorySnapshotAccessor:
    return InMemorySnapshotAccessor(load_catalog_entities(generate_demo_descriptors()))


def get_demo_catalog_summary() -> dict[str, Any]:
    """Entity counts per kind plus per-system component/API counts."""
    descriptors = generate_demo_descriptors()

    def of_kind(kind: str) -> list[dict[str, Any]]:
        return [d for d in descriptors if d["kind"] == kind]

    components = of_kind("Component")
    apis = of_kind("API")
    systems = of_kind("System")
    return {
        "total": len(descriptors),
        "domains": len(of_kind("Domain")),
        "systems": len(systems),
        "apis": len(apis),
        "components": len(components),
        "boundedContexts": [
            {
                "id": s["metadata"]["name"],
                "domain": s["spec"].get("domain"),
                "componentCount": sum(1 for c in components if c["spec"].get("system") == s["metadata"]["name"]),
                "apiCount": sum(1 for a in apis if a["spec"].get("system") == s["metadata"]["name"]),
            }
            for s in systems
        ],
    }
