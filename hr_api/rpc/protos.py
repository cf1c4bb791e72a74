import grpc

# Message classes and service stubs generated at import time from the .proto;
# the path is resolved against sys.path like a module import.
PROTO_PATH = "hr_api/protos/hr.proto"

protos, services = grpc.protos_and_services(PROTO_PATH)
