"""
Injection Constants

Well-known Istio labels, annotations and container names used by the
injection analyzers. Values must match the cluster convention exactly.
"""

# Namespace label requesting automatic sidecar injection
INJECTION_LABEL_NAME = 'istio-injection'
INJECTION_LABEL_ENABLE_VALUE = 'enabled'

# Injector webhook pods are labeled app=sidecarInjectorWebhook
APP_LABEL_NAME = 'app'
SIDECAR_INJECTOR_LABEL_VALUE = 'sidecarInjectorWebhook'
INJECTOR_CONTAINER_NAME = 'sidecar-injector-webhook'

ISTIO_PROXY_CONTAINER_NAME = 'istio-proxy'

# Pods carrying this annotation pin their own proxy image
PROXY_IMAGE_ANNOTATION = 'sidecar.istio.io/proxyImage'
