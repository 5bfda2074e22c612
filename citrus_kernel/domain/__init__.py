"""Pure domain layer of the citrus kernel: values, DTOs, clock, workflow, validation."""
