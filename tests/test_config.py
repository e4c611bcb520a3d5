from pathkernel import IntersectionConfig, get_intersection_config, set_intersection_config


def test_defaults():
    config = IntersectionConfig()
    assert config.max_recursion == 40
    assert config.max_calls == 4096
    assert config.fat_line_epsilon == 1e-9
    assert config.clip_shrink_threshold == 0.8


def test_get_returns_a_copy():
    config = get_intersection_config()
    config.max_calls = 1
    assert get_intersection_config().max_calls == 4096


def test_set_replaces_the_shared_config():
    previous = get_intersection_config()
    try:
        custom = IntersectionConfig(max_recursion=10, max_calls=100)
        set_intersection_config(custom)
        custom.max_calls = 5
        current = get_intersection_config()
        assert current.max_recursion == 10
        assert current.max_calls == 100
    finally:
        set_intersection_config(previous)
    assert get_intersection_config() == IntersectionConfig()
