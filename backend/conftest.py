import copy

import pytest

import deploy_config

_ENV_KEYS = [
    "SF_USERNAME", "SF_PASSWORD", "SF_SECURITY_TOKEN", "SF_DOMAIN",
    "SF_INSTANCE_URL", "SF_ACCESS_TOKEN", "SF_CONFIG_JSON", "SF_API_VERSION",
    "SF_TIMEOUT", "REPORT_NO_COLORS", "REPORT_NO_GLYPHS", "LOG_LEVEL",
    "APP_HOST", "APP_PORT",
]

# Shape returned by GET metadata/deployRequest/<id>?includeDetails=true
DEPLOY_REQUEST = {
    "id": "0Afq000001HzQ1qCAF",
    "validatedDeployRequestId": None,
    "deployOptions": {"checkOnly": True, "runTests": []},
    "deployResult": {
        "checkOnly": True,
        "completedDate": "2021-03-15T22:57:38.000+0000",
        "createdBy": "0054T000001OTRp",
        "createdByName": "Raj Rajen",
        "createdDate": "2021-03-15T22:55:21.000+0000",
        "details": {
            "componentSuccesses": [
                {"fullName": "OrderTriggerHelper", "componentType": "ApexClass", "success": True},
                {"fullName": "AccountService", "componentType": "ApexClass", "success": True},
                {"fullName": "orderSummary", "componentType": "LightningComponentBundle", "success": True},
                {"fullName": "package.xml", "componentType": "", "success": True},
            ],
            "componentFailures": [
                {
                    "fullName": "InvoiceBuilder",
                    "componentType": "ApexClass",
                    "problem": "Variable does not exist: total",
                    "problemType": "Error",
                    "lineNumber": 42,
                    "columnNumber": 9,
                },
                {
                    "fullName": "Order__c.Status__c",
                    "componentType": "CustomField",
                    "problem": "Picklist value not found",
                    "problemType": "Error",
                },
            ],
        },
        "done": True,
        "id": "0Afq000001HzQ1qCAF",
        "numberComponentErrors": 2,
        "numberComponentsDeployed": 4,
        "numberComponentsTotal": 6,
        "runTestsEnabled": False,
        "status": "Failed",
        "success": False,
    },
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    deploy_config.reset_config()
    yield
    deploy_config.reset_config()


@pytest.fixture
def deploy_request():
    return copy.deepcopy(DEPLOY_REQUEST)
