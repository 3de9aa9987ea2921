"""Prepare a database and a broker for an application already running on the host."""

from hollow_runner import (
    Container,
    ContainerConfig,
    ContainerRole,
    HollowSettings,
    apply_configuration,
)

db = Container(
    ContainerConfig(
        name="hollow-example-db",
        image="docker.io/library/postgres:16",
        ports={5432: None},
        network="hollow-example",
        network_aliases={"db"},
    )
)
broker = Container(
    ContainerConfig(
        name="hollow-example-broker",
        image="docker.io/library/rabbitmq:3",
        ports={5672: None},
        network="hollow-example",
        network_aliases={"rabbit"},
    )
)
app = Container(
    ContainerConfig(
        name="hollow-example-app",
        image="localhost/my-service:latest",
        role=ContainerRole.APPLICATION,
        env={
            "DB_HOST": "db",
            "DB_URL": "postgresql://app:secret@db:5432/app",
            "AMQP_URL": "amqp://rabbit:5672/%2F",
        },
    )
)

settings = HollowSettings(hostname="localhost", http_port="9080", context_root="myapp")
result = apply_configuration([db, broker, app], settings)

for port, image in result.ports.as_dict().items():
    print(f"{image}: localhost:{port}")

for key, value in app.env.items():
    print(f"{key}={value}")

print(f"Application running at {app.running_url}")
