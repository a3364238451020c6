# ---------- Container names ----------
USER_CONTAINER_NAME = "user-container"
QUEUE_CONTAINER_NAME = "queue-proxy"
FLUENTD_CONTAINER_NAME = "fluentd-proxy"

# ---------- Ports ----------
USER_PORT_NAME = "user-port"
USER_PORT = 8080

# Port the queue proxy serves requests (and proxied readiness checks) on.
QUEUE_PORT_NAME = "queue-port"
QUEUE_PORT = 8012
QUEUE_ADMIN_PORT_NAME = "queueadm-port"
QUEUE_ADMIN_PORT = 8022
QUEUE_QUIT_PATH = "/quitquitquit"
QUEUE_HEALTH_PATH = "/health"

# ---------- CPU requests ----------
USER_CONTAINER_CPU = "400m"
QUEUE_CONTAINER_CPU = "25m"
FLUENTD_CONTAINER_CPU = "75m"

# ---------- Volumes ----------
VAR_LOG_VOLUME_NAME = "varlog"
VAR_LOG_MOUNT_PATH = "/var/log"
FLUENTD_VAR_LOG_MOUNT_PATH = "/var/log/revisions"
FLUENTD_CONFIG_MAP_VOLUME_NAME = "configmap"
FLUENTD_CONFIG_MAP_NAME = "fluentd-varlog-config"
FLUENTD_CONFIG_MOUNT_PATH = "/etc/fluent/config.d"

# ---------- Labels & annotations ----------
REVISION_LABEL_KEY = "serving.knative.dev/revision"
REVISION_UID_LABEL_KEY = "serving.knative.dev/revisionUID"
APP_LABEL_KEY = "app"
SIDECAR_ISTIO_INJECT_ANNOTATION = "sidecar.istio.io/inject"
ISTIO_OUTBOUND_IP_RANGE_ANNOTATION = "traffic.sidecar.istio.io/includeOutboundIPRanges"

# ---------- Rollout ----------
POD_REPLICA_COUNT = 1
POD_MAX_UNAVAILABLE = 1
POD_MAX_SURGE = 1
