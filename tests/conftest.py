from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.package_builder import PackageBuilder


@pytest.fixture
def package_builder(tmp_path: Path) -> PackageBuilder:
    """Provide a reusable package builder rooted at the pytest tmp_path."""
    return PackageBuilder(tmp_path)


@pytest.fixture
def sample_package(package_builder: PackageBuilder) -> PackageBuilder:
    """A package with an app module, a networking module and the Cuckoo runtime."""
    package_builder.write(
        {
            "Sources/MyApp/Models.swift": "struct Model {}\n",
            "Sources/MyApp/Service.swift": "protocol Service {}\n",
            "Sources/MyApp/Resources/seed.json": "{}\n",
            "Sources/Networking/Client.swift": "protocol Client {}\n",
            "Sources/Cuckoo/Mock.swift": "protocol Mock {}\n",
            "Sources/Tool/main.swift": "print(1)\n",
        }
    )
    package_builder.write_graph(
        {
            "targets": [
                {
                    "name": "Networking",
                    "path": "Sources/Networking",
                    "sources": ["Client.swift"],
                },
                {
                    "name": "MyApp",
                    "path": "Sources/MyApp",
                    "sources": [
                        "Service.swift",
                        "Models.swift",
                        {"path": "Resources/seed.json", "type": "resource"},
                    ],
                    "dependencies": ["Networking"],
                },
                {
                    "name": "Cuckoo",
                    "path": "Sources/Cuckoo",
                    "sources": ["Mock.swift"],
                },
                {
                    "name": "Tool",
                    "kind": "executable",
                    "path": "Sources/Tool",
                    "sources": ["main.swift"],
                },
                {"name": "Vendor", "type": "binary"},
                {
                    "name": "MyAppTests",
                    "kind": "test",
                    "dependencies": [
                        {"target": "MyApp"},
                        {"product": "Cuckoo"},
                        {"target": "Networking"},
                        {"target": "Tool"},
                        {"target": "Vendor"},
                    ],
                },
            ],
            "products": [{"name": "Cuckoo", "targets": ["Cuckoo"]}],
        }
    )
    return package_builder
